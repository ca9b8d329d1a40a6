# geometry/hittable.py
from core.vector import Vector3
from materials.material import Material

class Intersect:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("point", "normal", "t", "is_intersecting", "material", "u", "v")

    def __init__(self, point: Vector3, normal: Vector3, t: float,
                 material: Material, u: float, v: float, is_intersecting: bool = True):
        self.point = point          # Intersection point
        self.normal = normal        # Outward unit normal
        self.t = t                  # Ray parameter at intersection
        self.is_intersecting = is_intersecting
        self.material = material
        self.u = u                  # Surface parameterization in [0,1]
        self.v = v

    @staticmethod
    def empty() -> "Intersect":
        """
        The no-hit sentinel. Its material is the inert black material so code
        that reads .material before checking the flag still works.
        """
        return Intersect(Vector3.zero(), Vector3.zero(), 0.0, Material.black(),
                         0.0, 0.0, is_intersecting=False)

    def __repr__(self) -> str:
        if not self.is_intersecting:
            return "Intersect(empty)"
        return f"Intersect(point={self.point}, normal={self.normal}, t={self.t}, uv=({self.u}, {self.v}))"

class RayIntersect:
    """
    Capability shared by every primitive that can be hit by a ray.
    """
    def ray_intersect(self, origin: Vector3, direction: Vector3) -> Intersect:
        raise NotImplementedError("ray_intersect() must be implemented by subclasses.")
