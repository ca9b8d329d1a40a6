# core/aabb.py
from typing import Tuple
from core.vector import Vector3

# Direction components below this are treated as parallel to the slab
PARALLEL_EPSILON = 1e-6
PARALLEL_INVERSE = 1e6

class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    @staticmethod
    def from_center(center: Vector3, size: float) -> "AABB":
        half = size / 2.0
        offset = Vector3(half, half, half)
        return AABB(center - offset, center + offset)

    def slab_interval(self, origin: Vector3, direction: Vector3) -> Tuple[float, float]:
        """
        Slab method: intersects the per-axis entry/exit intervals and returns
        (tmin, tmax). The box is hit when tmax >= 0 and tmin <= tmax.

        Near-zero direction components get a large finite inverse instead of
        a division by zero, so parallel rays never produce inf or NaN.
        """
        intervals = []
        for a in ('x', 'y', 'z'):
            d = getattr(direction, a)
            inv_d = PARALLEL_INVERSE if abs(d) < PARALLEL_EPSILON else 1.0 / d
            t0 = (getattr(self.minimum, a) - getattr(origin, a)) * inv_d
            t1 = (getattr(self.maximum, a) - getattr(origin, a)) * inv_d
            intervals.append((min(t0, t1), max(t0, t1)))

        tmin = max(near for near, _ in intervals)
        tmax = min(far for _, far in intervals)
        return tmin, tmax

