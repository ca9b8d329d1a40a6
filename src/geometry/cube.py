# geometry/cube.py
import math
from typing import Tuple
from core.aabb import AABB
from core.vector import Vector3
from geometry.hittable import Intersect, RayIntersect
from materials.material import Material

# A normal component above this picks the face used for UV mapping
UV_FACE_THRESHOLD = 0.9

class Cube(RayIntersect):
    """
    An axis-aligned cube defined by its center, edge length and material.
    """
    def __init__(self, center: Vector3, size: float, material: Material):
        self.center = center
        self.size = size
        self.material = material

    def bounding_box(self) -> AABB:
        return AABB.from_center(self.center, self.size)

    def moved_to(self, center: Vector3) -> "Cube":
        """Copy of this cube at a new center, sharing the material."""
        return Cube(center, self.size, self.material)

    def get_uv(self, point: Vector3, normal: Vector3) -> Tuple[float, float]:
        """
        Maps the hit point onto the face picked by the normal. v is flipped
        so (0, 0) is the top-left corner of an image.
        """
        half_size = self.size / 2.0
        local = point - self.center

        if abs(normal.x) > UV_FACE_THRESHOLD:
            # Left or right face
            u = (local.z + half_size) / self.size
            v = (local.y + half_size) / self.size
        elif abs(normal.y) > UV_FACE_THRESHOLD:
            # Top or bottom face
            u = (local.x + half_size) / self.size
            v = (local.z + half_size) / self.size
        else:
            # Front or back face
            u = (local.x + half_size) / self.size
            v = (local.y + half_size) / self.size
        return u, 1.0 - v

    def face_normal(self, point: Vector3) -> Vector3:
        """
        Outward normal of the face containing point: the axis where the local
        coordinate has the largest magnitude. On an exact tie the later axis wins,
        so an edge between x and y faces y and a corner faces z.
        """
        local = point - self.center
        ax, ay, az = abs(local.x), abs(local.y), abs(local.z)
        if ax > ay and ax > az:
            return Vector3(math.copysign(1.0, local.x), 0.0, 0.0)
        if ay > az:
            return Vector3(0.0, math.copysign(1.0, local.y), 0.0)
        return Vector3(0.0, 0.0, math.copysign(1.0, local.z))

    def ray_intersect(self, origin: Vector3, direction: Vector3) -> Intersect:
        tmin, tmax = self.bounding_box().slab_interval(origin, direction)

        # The whole box is behind the origin
        if tmax < 0.0:
            return Intersect.empty()
        # Slabs do not overlap
        if tmin > tmax:
            return Intersect.empty()

        # tmin <= 0 means the origin is inside the box, exit through tmax
        t = tmin if tmin > 0.0 else tmax
        if t <= 0.0:
            return Intersect.empty()

        point = origin + direction * t
        normal = self.face_normal(point)
        u, v = self.get_uv(point, normal)
        return Intersect(point, normal, t, self.material, u, v)

    def __repr__(self) -> str:
        return f"Cube(center={self.center}, size={self.size})"
