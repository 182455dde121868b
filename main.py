import argparse
import time

import config
from capture import CameraCapture, list_devices
from connection_manager import SerialLink
from pipeline import GlowPipeline
from settings import load_settings, save_settings
from simulator import LightSimulator


def parse_point(text):
    """Parse 'x,y' into a normalized control point."""
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got '{text}'")
    if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
        raise argparse.ArgumentTypeError(f"point '{text}' is outside 0-1 range")
    return x, y


def build_parser():
    parser = argparse.ArgumentParser(
        description="Stream ambient light colors from a camera to a serial light controller."
    )
    parser.add_argument("--config", default=config.SETTINGS_FILE, help="settings file")
    parser.add_argument("--port", help="serial port, skips device discovery")
    parser.add_argument(
        "--device-name", default=config.DEVICE_NAME, help="text to look for in port names"
    )
    parser.add_argument("--camera", type=int, help="camera index")
    parser.add_argument("--no-camera", action="store_true", help="demo colors only")
    parser.add_argument(
        "--flip", action=argparse.BooleanOptionalAction, default=None,
        help="reverse light order on the wire",
    )
    parser.add_argument(
        "--point", type=parse_point, action="append", metavar="X,Y",
        help=f"control point, give {config.CONTROL_POINTS} to arm sampling",
    )
    parser.add_argument("--save", action="store_true", help="save effective settings")
    parser.add_argument("--list-cameras", action="store_true", help="list cameras and exit")
    parser.add_argument("--simulate", metavar="PORT", help="run the controller simulator")
    return parser


def resolve_settings(args):
    settings = load_settings(args.config)

    if args.port:
        settings["com_port"] = args.port
    if args.camera is not None:
        settings["camera_index"] = args.camera
    if args.flip is not None:
        settings["flip"] = args.flip
    if args.point:
        settings["control_points"] = list(args.point)

    return settings


def run_loop(pipeline, capture=None, max_frames=None, clock=time.monotonic, sleep=time.sleep):
    """Frame loop, one pipeline step per frame. Errors skip the frame only."""
    delay = 1.0 / config.RENDER_FPS
    start = clock()
    frame_count = 0

    while max_frames is None or frame_count < max_frames:
        try:
            if capture is not None and capture.check_new_frame():
                frame = capture.get_frame()
                if frame is not None:
                    pipeline.submit_frame(frame)

            pipeline.update(clock() - start)
        except Exception as e:
            print(f"[Pipeline] Frame error: {e}")

        frame_count += 1
        sleep(delay)

    return frame_count


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.list_cameras:
        for index in list_devices():
            print(f"[Capture] Device {index}")
        return 0

    if args.simulate:
        LightSimulator(args.simulate).run()
        return 0

    settings = resolve_settings(args)
    if args.save:
        save_settings(settings, args.config)

    link = SerialLink(port=settings["com_port"] or None, device_name=args.device_name)
    link.connect()

    capture = None
    if not args.no_camera:
        capture = CameraCapture()
        if not capture.open(settings["camera_index"]):
            capture = None

    pipeline = GlowPipeline(link, flip=settings["flip"])
    try:
        pipeline.set_control_points(settings["control_points"])
    except ValueError as e:
        print(f"[Pipeline] Ignoring control points: {e}")
        pipeline.reset_points()

    if not pipeline.armed:
        print("[Pipeline] No sampling geometry, running demo colors")

    try:
        run_loop(pipeline, capture)
    except KeyboardInterrupt:
        print("[Pipeline] Stopped")
    finally:
        if capture is not None:
            capture.close()
        link.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
