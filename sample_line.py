"""
Color samples along straight line segments of the captured image.
"""

import config


class ColorSample:
    """Single smoothed color, slowly fades toward fresh samples to reduce flicker."""

    def __init__(self, blend=config.BLEND_FACTOR):
        self.blend = blend
        self.color = (0.0, 0.0, 0.0)

    def update(self, sample):
        keep = 1.0 - self.blend
        self.color = tuple(
            old * keep + new * self.blend for old, new in zip(self.color, sample)
        )
        return self.color


class SampleLine:
    """Stores color samples at evenly spaced points between start and end."""

    def __init__(self, points, start, end, blend=config.BLEND_FACTOR):
        if points < 2:
            raise ValueError(f"Sample line needs at least 2 points, got {points}")

        self.points = points
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))
        self.samples = [ColorSample(blend) for _ in range(points)]

    def __len__(self):
        return self.points

    def position_at(self, i):
        """Normalized position of sample i."""
        if not 0 <= i < self.points:
            raise IndexError(f"Sample index {i} out of range 0-{self.points - 1}")

        t = i / (self.points - 1)
        return (
            self.start[0] + (self.end[0] - self.start[0]) * t,
            self.start[1] + (self.end[1] - self.start[1]) * t,
        )

    def color_at(self, i):
        if not 0 <= i < self.points:
            raise IndexError(f"Sample index {i} out of range 0-{self.points - 1}")
        return self.samples[i].color

    def colors(self, limit=None):
        """First `limit` smoothed colors (all of them by default)."""
        if limit is None:
            limit = self.points
        return [sample.color for sample in self.samples[:limit]]

    def sample(self, source):
        """
        Read one pixel per point from source and blend it into the samples.
        Source must expose width, height and read_pixel(x, y).
        Horizontal axis is mirrored: the camera faces the lights.
        """
        for i, color_sample in enumerate(self.samples):
            nx, ny = self.position_at(i)

            # x == width at nx == 0 is expected, clamp to the last pixel
            x = min(max(int(source.width - nx * source.width), 0), source.width - 1)
            y = min(max(int(ny * source.height), 0), source.height - 1)

            color_sample.update(source.read_pixel(x, y))
