# renderer/settings.py
import math
from dataclasses import dataclass
from typing import Optional

@dataclass
class RenderSettings:
    """
    Window and render options of the interactive viewer.

    The image is traced at window size divided by render_scale and stretched
    to the window when presented. samples_per_frame defaults to one 120th of
    the traced pixels.
    """
    width: int = 1300
    height: int = 900
    render_scale: int = 1
    fov: float = math.pi / 3.0
    rotation_speed: float = math.pi / 100.0
    zoom_speed: float = 0.1
    samples_per_frame: Optional[int] = None
    sky: str = "default"
    target_fps: int = 60

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Window size must be positive, got {self.width}x{self.height}")
        if self.render_scale <= 0:
            raise ValueError(f"render_scale must be positive, got {self.render_scale}")
        if self.render_scale > min(self.width, self.height):
            raise ValueError(f"render_scale {self.render_scale} leaves no pixels to render")
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"fov must be in (0, pi), got {self.fov}")
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")
        if self.samples_per_frame is None:
            self.samples_per_frame = max(1, self.render_width * self.render_height // 120)
        elif self.samples_per_frame <= 0:
            raise ValueError(f"samples_per_frame must be positive, got {self.samples_per_frame}")

    @property
    def render_width(self) -> int:
        return self.width // self.render_scale

    @property
    def render_height(self) -> int:
        return self.height // self.render_scale
