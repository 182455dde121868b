import json
import os

import config

DEFAULTS = {
    "control_points": [],
    "flip": config.DEFAULT_FLIP,
    "com_port": "",
    "camera_index": None,
}


def load_settings(path=config.SETTINGS_FILE):
    """Load saved settings, falling back to defaults for anything missing."""
    settings = dict(DEFAULTS)
    settings["control_points"] = []

    if not os.path.exists(path):
        return settings

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"[Settings] Error loading {path}: {e}")
        return settings

    if not isinstance(data, dict):
        print(f"[Settings] Ignoring {path}: expected an object")
        return settings

    for key in DEFAULTS:
        if key in data:
            settings[key] = data[key]

    try:
        settings["control_points"] = [
            (float(p[0]), float(p[1])) for p in settings["control_points"] or []
        ]
    except (TypeError, ValueError, IndexError) as e:
        print(f"[Settings] Ignoring malformed control points: {e}")
        settings["control_points"] = []

    if not isinstance(settings["flip"], bool):
        print(f"[Settings] Ignoring non-boolean flip value: {settings['flip']!r}")
        settings["flip"] = config.DEFAULT_FLIP
    return settings


def save_settings(settings, path=config.SETTINGS_FILE) -> bool:
    """Save settings to file."""
    data = {key: settings.get(key, default) for key, default in DEFAULTS.items()}
    data["control_points"] = [list(p) for p in data["control_points"]]

    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        print(f"[Settings] Saved to {path}")
        return True
    except OSError as e:
        print(f"[Settings] Failed to save {path}: {e}")
        return False
