# materials/material.py
from dataclasses import dataclass
from typing import Optional, Tuple
from core.vector import Vector3

@dataclass(frozen=True)
class Material:
    """
    Optical response of a surface for the Phong + Whitted shading model.

    albedo holds the weights (diffuse, specular, reflect, transmit). They are
    not required to sum to 1. specular is the Phong shininess exponent.
    texture_id and normal_map_id name images held by the TextureManager.
    """
    diffuse: Vector3
    specular: float
    albedo: Tuple[float, float, float, float]
    refractive_index: float
    texture_id: Optional[str] = None
    normal_map_id: Optional[str] = None

    @property
    def reflectivity(self) -> float:
        return self.albedo[2]

    @property
    def transparency(self) -> float:
        return self.albedo[3]

    @staticmethod
    def black() -> "Material":
        """Inert placeholder carried by the no-hit intersection."""
        return Material(
            diffuse=Vector3(0.0, 0.0, 0.0),
            specular=0.0,
            albedo=(0.0, 0.0, 0.0, 0.0),
            refractive_index=0.0,
        )
