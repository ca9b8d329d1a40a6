# renderer/framebuffer.py
from typing import Tuple
import numpy as np
from numba import njit
from PIL import Image

Color = Tuple[int, int, int]

# Block borders are darkened by this factor to soften seams between splats
BLOCK_EDGE_FACTOR = 0.8

@njit
def fill_buffer_kernel(buffer, r, g, b):
    for x in range(buffer.shape[0]):
        for y in range(buffer.shape[1]):
            buffer[x, y, 0] = r
            buffer[x, y, 1] = g
            buffer[x, y, 2] = b

@njit
def blend_pixel_kernel(buffer, x, y, r, g, b, alpha):
    if x < buffer.shape[0] and y < buffer.shape[1]:
        inv = 1.0 - alpha
        buffer[x, y, 0] = min(255, int(buffer[x, y, 0] * inv + r * alpha))
        buffer[x, y, 1] = min(255, int(buffer[x, y, 1] * inv + g * alpha))
        buffer[x, y, 2] = min(255, int(buffer[x, y, 2] * inv + b * alpha))

@njit
def fill_block_kernel(buffer, base_x, base_y, r, g, b, size, edge_factor):
    for dy in range(size):
        for dx in range(size):
            px = base_x + dx
            py = base_y + dy
            if px < buffer.shape[0] and py < buffer.shape[1]:
                if dx == 0 or dy == 0 or dx == size - 1 or dy == size - 1:
                    factor = edge_factor
                else:
                    factor = 1.0
                buffer[px, py, 0] = int(r * factor)
                buffer[px, py, 1] = int(g * factor)
                buffer[px, py, 2] = int(b * factor)

class Framebuffer:
    """
    8-bit RGB render target stored as a (width, height, 3) numpy array, the
    layout pygame.surfarray expects. dirty tells the presenter whether the
    pixels changed since the last blit.
    """
    def __init__(self, width: int, height: int, background_color: Color = (0, 0, 0)):
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.background_color = background_color
        self.buffer = np.zeros((width, height, 3), dtype=np.uint8)
        self.dirty = True
        self.clear()

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def set_background_color(self, color: Color):
        self.background_color = color

    def clear(self):
        r, g, b = self.background_color
        fill_buffer_kernel(self.buffer, r, g, b)
        self.dirty = True

    def set_pixel(self, x: int, y: int, color: Color):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.buffer[x, y] = color
            self.dirty = True

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b = self.buffer[x, y]
        return (int(r), int(g), int(b))

    def blend_pixel(self, x: int, y: int, color: Color, alpha: float):
        """Mixes color into the stored pixel: old * (1 - alpha) + new * alpha."""
        if 0 <= x < self.width and 0 <= y < self.height:
            r, g, b = color
            blend_pixel_kernel(self.buffer, x, y, r, g, b, alpha)
            self.dirty = True

    def fill_block(self, x: int, y: int, color: Color, size: int):
        """Splats color over a size x size block anchored at (x, y), with darker borders."""
        r, g, b = color
        fill_block_kernel(self.buffer, x, y, r, g, b, size, BLOCK_EDGE_FACTOR)
        self.dirty = True

    def to_image(self) -> Image.Image:
        # PIL wants rows first
        return Image.fromarray(np.ascontiguousarray(self.buffer.transpose(1, 0, 2)))

    def save(self, file_path: str):
        self.to_image().save(file_path)
