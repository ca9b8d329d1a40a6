# core/utils.py
import math
from typing import Optional
from core.vector import Vector3

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(incident: Vector3, normal: Vector3, refractive_index: float) -> Optional[Vector3]:
    """
    Bends the incident direction through a surface separating air (index 1)
    from a medium of the given refractive index, following Snell's law.

    The normal is assumed to point out of the medium. When the ray is leaving
    the medium (incident and normal on the same side) the two indices swap and
    the normal is flipped.

    Returns None on total internal reflection.
    """
    cosi = max(-1.0, min(incident.dot(normal), 1.0))
    etai = 1.0
    etat = refractive_index
    n = normal

    if cosi > 0.0:
        etai, etat = etat, etai
        n = -normal
    else:
        cosi = -cosi

    eta = etai / etat
    k = 1.0 - eta * eta * (1.0 - cosi * cosi)

    if k < 0.0:
        return None
    return incident * eta + n * (eta * cosi - math.sqrt(k))

def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
    """Linear interpolation from a to b with t clamped to [0, 1]."""
    return a.lerp(b, t)
