# renderer/tone_mapping.py
from typing import Tuple
from core.vector import Vector3

def channel_to_byte(value: float) -> int:
    """
    Linear channel to 8 bits. Values above 1 saturate at 255; negative
    values and NaN become 0.
    """
    scaled = value * 255.0
    if not scaled > 0.0:
        return 0
    return int(min(scaled, 255.0))

def vector3_to_color(v: Vector3) -> Tuple[int, int, int]:
    """Converts a linear color to an 8-bit RGB triple by clamping, without tone curve."""
    return (channel_to_byte(v.x), channel_to_byte(v.y), channel_to_byte(v.z))
