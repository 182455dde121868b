"""
Color helpers for the light controller.
Colors are (r, g, b) tuples with components in 0-1 range.
"""

import math

import config


def hsv_to_rgb(h, s, v):
    """Convert HSV (0-1 range) to RGB (0-1 range)."""
    if s == 0:
        return v, v, v

    i = int(h * 6)
    f = (h * 6) - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    i %= 6
    if i == 0:
        r, g, b = v, t, p
    elif i == 1:
        r, g, b = q, v, p
    elif i == 2:
        r, g, b = p, v, t
    elif i == 3:
        r, g, b = p, q, v
    elif i == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return r, g, b


def rgb_to_hsv(r, g, b):
    """Convert RGB (0-1 range) to HSV (0-1 range)."""
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    v = max_c

    if max_c == min_c:
        return 0.0, 0.0, v

    delta = max_c - min_c
    s = delta / max_c

    if max_c == r:
        h = (g - b) / delta
    elif max_c == g:
        h = 2.0 + (b - r) / delta
    else:
        h = 4.0 + (r - g) / delta

    h = (h / 6.0) % 1.0
    return h, s, v


def adjust_color(color):
    """Adjust gamma for the light controller, hue is kept as is."""
    h, s, v = rgb_to_hsv(*color)

    s = s ** config.SATURATION_GAMMA
    v = v ** config.VALUE_GAMMA

    return hsv_to_rgb(h, s, v)


def generate_demo_colors(seconds, num_leds=config.GLOW_COLORS):
    """
    Slowly drifting hue and brightness waves.
    Shown while no sampling geometry is defined.
    """
    colors = []

    for i in range(num_leds):
        hue = ((math.sin(seconds + i * 0.1) + 1.0) * 0.5) % 1.0
        value = math.sin(seconds - i * 0.033) * 0.5 + 0.5
        colors.append(hsv_to_rgb(hue, 1.0, value))

    return colors
