# geometry/world.py
import math
from typing import Iterable, List, Optional
from core.vector import Vector3
from geometry.cube import Cube
from geometry.hittable import Intersect

def nearest_intersection(objects: Iterable[Cube], origin: Vector3, direction: Vector3) -> Intersect:
    """
    Brute-force scan for the closest hit. On an exact tie in t the object
    that comes first keeps the hit.
    """
    intersect = Intersect.empty()
    zbuffer = math.inf
    for obj in objects:
        i = obj.ray_intersect(origin, direction)
        if i.is_intersecting and i.t < zbuffer:
            zbuffer = i.t
            intersect = i
    return intersect

def rotate_y(point: Vector3, angle: float, pivot: Vector3) -> Vector3:
    """Rotates point about the vertical axis passing through pivot."""
    local = point - pivot
    c = math.cos(angle)
    s = math.sin(angle)
    return pivot + Vector3(local.x * c + local.z * s, local.y, -local.x * s + local.z * c)

class World:
    """
    The cubes of a scene together with the light and sky that shade them.
    """
    def __init__(self, objects: Optional[List[Cube]] = None, light=None, sky=None):
        self.objects: List[Cube] = list(objects) if objects else []
        self.light = light
        self.sky = sky

    def add(self, obj: Cube):
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def with_environment(self, light=None, sky=None) -> "World":
        """Same cubes under a different light and/or sky."""
        return World(self.objects,
                     light if light is not None else self.light,
                     sky if sky is not None else self.sky)

    def rotated(self, angle: float, pivot: Optional[Vector3] = None) -> "World":
        """
        Returns a frame-local copy whose cube centers are rotated about the
        Y axis through pivot. Cubes stay axis-aligned: only their positions
        move.
        """
        if pivot is None:
            pivot = Vector3(0.0, 0.0, 0.0)
        moved = [obj.moved_to(rotate_y(obj.center, angle, pivot)) for obj in self.objects]
        return World(moved, self.light, self.sky)

class SceneRotation:
    """
    Global spin applied to the scene. Carried explicitly through the frame
    loop instead of living in module state.
    """
    def __init__(self, speed: float = 0.0, angle: float = 0.0, active: bool = False):
        self.speed = speed
        self.angle = angle
        self.active = active

    def toggle(self) -> bool:
        self.active = not self.active
        return self.active

    def advance(self) -> bool:
        """Steps the angle by one frame. Returns True if the scene moved."""
        if not self.active or self.speed == 0.0:
            return False
        self.angle = (self.angle + self.speed) % (2.0 * math.pi)
        return True

    def apply(self, world: World, pivot: Optional[Vector3] = None) -> World:
        if self.angle == 0.0:
            return world
        return world.rotated(self.angle, pivot)
