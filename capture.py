"""Camera capture through OpenCV."""

import cv2

import config


def list_devices(max_test=config.MAX_CAMERA_INDEX):
    """Indices of cameras that can be opened."""
    devices = []
    for i in range(max_test):
        cap = cv2.VideoCapture(i)
        if cap.isOpened():
            devices.append(i)
        cap.release()
    return devices


class CameraCapture:
    """First available camera, frames returned as RGB arrays."""

    def __init__(self, width=config.WIDTH, height=config.HEIGHT):
        self.width = width
        self.height = height
        self.cap = None
        self.index = None

    @property
    def is_open(self):
        return self.cap is not None

    def open(self, index=None) -> bool:
        """Open the given camera, or the first available one."""
        self.close()

        candidates = [index] if index is not None else range(config.MAX_CAMERA_INDEX)
        for i in candidates:
            cap = cv2.VideoCapture(i)
            if not cap.isOpened():
                print(f"[Capture] Device {i} is NOT available")
                cap.release()
                continue

            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            self.cap = cap
            self.index = i
            print(f"[Capture] Found device {i}")
            return True

        print("[Capture] No camera available")
        return False

    def check_new_frame(self) -> bool:
        if self.cap is None:
            return False
        try:
            return self.cap.grab()
        except cv2.error as e:
            print(f"[Capture] Grab error: {e}")
            return False

    def get_frame(self):
        """Latest grabbed frame as HxWx3 RGB uint8, or None."""
        if self.cap is None:
            return None
        try:
            ok, frame = self.cap.retrieve()
        except cv2.error as e:
            print(f"[Capture] Read error: {e}")
            return None
        if not ok or frame is None:
            return None
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def close(self):
        if self.cap is not None:
            self.cap.release()
        self.cap = None
        self.index = None
