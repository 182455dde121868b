import numpy as np
from PIL import Image

import config


def to_rgb_array(pixels):
    """Normalize an image buffer to an HxWx3 uint8 array."""
    pixels = np.asarray(pixels)

    if pixels.ndim == 2:
        pixels = np.stack([pixels] * 3, axis=-1)
    elif pixels.shape[2] == 4:
        pixels = pixels[:, :, :3]

    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)
    return np.ascontiguousarray(pixels)


class RenderTarget:
    """In-memory render target that can be drawn into and read back."""

    def __init__(self, width, height):
        if width < 1 or height < 1:
            raise ValueError(f"Render target size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def size(self):
        return self.width, self.height

    def draw(self, source):
        """Draw source stretched over the whole target with bilinear filtering."""
        if isinstance(source, RenderTarget):
            source = source.pixels
        source = to_rgb_array(source)

        h, w = source.shape[:2]
        if (w, h) == self.size:
            self.pixels[...] = source
            return

        image = Image.fromarray(source)
        image = image.resize(self.size, Image.Resampling.BILINEAR)
        self.pixels[...] = np.asarray(image)

    def read_pixel(self, x, y):
        """Read one pixel as (r, g, b) in 0-1 range. Coordinates are clamped."""
        x = min(max(int(x), 0), self.width - 1)
        y = min(max(int(y), 0), self.height - 1)

        r, g, b = self.pixels[y, x]
        return r / 255.0, g / 255.0, b / 255.0


class BlurCascade:
    """
    Cascaded down-sampling for blur.
    Each level halves the previous one, the last level is the sampling source.
    """

    def __init__(self, width=config.WIDTH, height=config.HEIGHT, depth=config.SMOOTH):
        if depth < 1:
            raise ValueError(f"Cascade depth must be at least 1, got {depth}")

        # Main captured image
        self.base = RenderTarget(width, height)

        self.levels = []
        for i in range(depth):
            level_w = max(1, width // (1 << (i + 1)))
            level_h = max(1, height // (1 << (i + 1)))
            self.levels.append(RenderTarget(level_w, level_h))

        self.final_level = None

    @property
    def depth(self):
        return len(self.levels)

    def downsample(self, frame):
        """Render frame through every level and return the smallest one."""
        self.base.draw(frame)

        previous = self.base
        for level in self.levels:
            level.draw(previous)
            previous = level

        self.final_level = previous
        return previous
