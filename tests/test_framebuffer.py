"""Unit tests for the framebuffer and its pixel kernels."""

import numpy as np
import pytest

from renderer.framebuffer import Framebuffer
from renderer.tone_mapping import channel_to_byte, vector3_to_color
from core.vector import Vector3


class TestFramebuffer:
    """Tests for pixel writes."""

    def test_layout_and_clear(self):
        fb = Framebuffer(4, 3, background_color=(10, 20, 30))
        assert fb.buffer.shape == (4, 3, 3)
        assert fb.buffer.dtype == np.uint8
        assert fb.pixel_count == 12
        assert fb.get_pixel(3, 2) == (10, 20, 30)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Framebuffer(0, 10)

    def test_set_pixel_ignores_out_of_range(self):
        fb = Framebuffer(4, 3)
        fb.set_pixel(1, 2, (255, 128, 0))
        fb.set_pixel(4, 0, (1, 1, 1))
        fb.set_pixel(-1, 0, (1, 1, 1))
        assert fb.get_pixel(1, 2) == (255, 128, 0)
        assert int(fb.buffer.sum()) == 255 + 128

    def test_blend_pixel_truncates(self):
        fb = Framebuffer(2, 2, background_color=(100, 100, 100))
        fb.blend_pixel(0, 0, (200, 0, 51), 0.5)
        assert fb.get_pixel(0, 0) == (150, 50, 75)
        assert fb.get_pixel(1, 1) == (100, 100, 100)

    def test_fill_block_darkens_border(self):
        fb = Framebuffer(5, 5)
        fb.fill_block(1, 1, (100, 200, 250), 3)
        assert fb.get_pixel(1, 1) == (80, 160, 200)
        assert fb.get_pixel(3, 2) == (80, 160, 200)
        assert fb.get_pixel(2, 2) == (100, 200, 250)
        assert fb.get_pixel(0, 0) == (0, 0, 0)
        assert fb.get_pixel(4, 4) == (0, 0, 0)

    def test_fill_block_is_clipped(self):
        fb = Framebuffer(4, 4)
        fb.fill_block(3, 3, (100, 100, 100), 4)
        assert fb.get_pixel(3, 3) == (80, 80, 80)

    def test_dirty_flag(self):
        fb = Framebuffer(2, 2)
        assert fb.dirty
        fb.dirty = False
        fb.set_pixel(0, 0, (1, 2, 3))
        assert fb.dirty

    def test_save_writes_rows_first(self, tmp_path):
        fb = Framebuffer(4, 2)
        fb.set_pixel(3, 1, (255, 0, 0))
        image = fb.to_image()
        assert image.size == (4, 2)
        assert image.getpixel((3, 1)) == (255, 0, 0)
        path = tmp_path / "shot.png"
        fb.save(str(path))
        assert path.exists()


class TestToneMapping:
    """Tests for the float to 8-bit conversion."""

    def test_channel_to_byte(self):
        assert channel_to_byte(0.0) == 0
        assert channel_to_byte(0.5) == 127
        assert channel_to_byte(1.0) == 255
        assert channel_to_byte(3.0) == 255
        assert channel_to_byte(-0.2) == 0
        assert channel_to_byte(float("nan")) == 0

    def test_vector3_to_color(self):
        assert vector3_to_color(Vector3(0.5, 0.25, 2.0)) == (127, 63, 255)
