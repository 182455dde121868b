"""
Capture -> blur -> sample -> adjust -> encode -> transmit, one step per frame.
"""

import config
import effects
from image_processor import BlurCascade
from protocol import encode_packet, to_byte
from sample_line import SampleLine

UNARMED = "unarmed"
ARMED = "armed"


class ControlPoints:
    """
    Points defining the sampling lines, in normalized window coordinates.

    Unarmed while fewer than `capacity` points are known. Adding the last
    point arms the geometry; one more point clears the set and starts over.
    """

    def __init__(self, capacity=config.CONTROL_POINTS):
        self.capacity = capacity
        self._points = []

    def __len__(self):
        return len(self._points)

    def __getitem__(self, i):
        return self._points[i]

    @property
    def points(self):
        return list(self._points)

    @property
    def state(self):
        return ARMED if len(self._points) == self.capacity else UNARMED

    @property
    def armed(self):
        return self.state == ARMED

    def add(self, x, y) -> bool:
        """Add a point, return True if this point armed the geometry."""
        if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
            raise ValueError(f"Control point ({x}, {y}) is outside the unit square")

        if self.armed:
            self._points.clear()

        self._points.append((float(x), float(y)))
        return self.armed

    def clear(self):
        self._points.clear()


class GlowPipeline:
    """Owns the sampling state and the output timing for one light controller."""

    def __init__(self, link=None, flip=config.DEFAULT_FLIP, fps=config.FPS, cascade=None):
        self.link = link
        self.flip = flip
        self.interval = 1.0 / fps

        self.cascade = cascade or BlurCascade()
        self.control_points = ControlPoints()
        self.lines = []

        self.frame = None
        self.colors = [(0.0, 0.0, 0.0)] * config.GLOW_COLORS
        self.mode = None

        # Seconds counter at the last packet
        self.last_sent = 0.0
        self.packet_count = 0

    @property
    def state(self):
        return self.control_points.state

    @property
    def armed(self):
        return self.control_points.armed

    def add_control_point(self, x, y):
        """Add a control point, building the sample lines once all are known."""
        if self.control_points.add(x, y):
            self.setup_lines()
            print(f"[Pipeline] Armed with points {self.control_points.points}")
        else:
            self.lines = []

    def set_control_points(self, points):
        self.reset_points()
        for x, y in points:
            self.add_control_point(x, y)

    def reset_points(self):
        self.control_points.clear()
        self.lines = []

    def setup_lines(self):
        points = self.control_points
        self.lines = [
            SampleLine(count, points[i], points[i + 1])
            for i, count in enumerate(config.SEGMENT_POINTS)
        ]

    def toggle_flip(self):
        self.flip = not self.flip
        return self.flip

    def submit_frame(self, frame):
        """Set the latest captured frame."""
        self.frame = frame

    def process_capture(self) -> bool:
        """Blur the latest frame and sample lines from the smallest level."""
        if self.frame is None:
            return False

        source = self.cascade.downsample(self.frame)

        # Sample only after the last level is fully rendered
        if self.armed:
            for line in self.lines:
                line.sample(source)
        return True

    def prepare_sampled_colors(self):
        colors = []
        for line, take in zip(self.lines, config.SEGMENT_LIGHTS):
            colors.extend(effects.adjust_color(c) for c in line.colors(take))
        self.colors = colors
        self.mode = "sampled"
        return colors

    def prepare_demo_colors(self, seconds):
        self.colors = effects.generate_demo_colors(seconds, config.GLOW_COLORS)
        self.mode = "demo"
        return self.colors

    def send_colors(self):
        packet = encode_packet(self.colors, self.flip)
        if self.link is not None:
            self.link.send(packet)

        self.packet_count += 1
        if self.packet_count % config.LOG_EVERY == 0:
            sample = [
                f"LED{i}:({to_byte(r)},{to_byte(g)},{to_byte(b)})"
                for i, (r, g, b) in enumerate(self.colors[:3])
            ]
            print(
                f"[Pipeline] Packet {self.packet_count} | Mode: {self.mode} | {', '.join(sample)}..."
            )
        return packet

    def update(self, seconds):
        """
        One frame step. `seconds` is time since start.
        Returns the packet if one was due this step, otherwise None.
        """
        self.process_capture()

        # Send only if enough time passed since the last packet
        if seconds - self.last_sent <= self.interval:
            return None

        if self.armed:
            self.prepare_sampled_colors()
        else:
            self.prepare_demo_colors(seconds)

        self.last_sent = seconds
        return self.send_colors()
