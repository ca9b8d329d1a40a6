# renderer/light.py
from core.vector import Vector3

class Light:
    """
    A point light. color is linear RGB in [0, 1]; intensity scales both the
    diffuse and the specular term.
    """
    __slots__ = ("position", "color", "intensity")

    def __init__(self, position: Vector3, color: Vector3, intensity: float):
        self.position = position
        self.color = color
        self.intensity = intensity

    def __repr__(self) -> str:
        return f"Light(position={self.position}, color={self.color}, intensity={self.intensity})"

# Light position of the demo scene
DEFAULT_LIGHT_POSITION = Vector3(5.0, 10.0, 5.0)

class LightPresets:
    """Predefined lights with different colors and intensities."""

    @staticmethod
    def daylight(intensity: float = 2.0) -> Light:
        return Light(DEFAULT_LIGHT_POSITION, Vector3(1.0, 1.0, 1.0), intensity)

    @staticmethod
    def warm_light(intensity: float = 2.0) -> Light:
        return Light(DEFAULT_LIGHT_POSITION, Vector3(1.0, 0.95, 0.9), intensity)

    @staticmethod
    def cool_light(intensity: float = 1.5) -> Light:
        return Light(DEFAULT_LIGHT_POSITION, Vector3(0.9, 0.95, 1.0), intensity)

    @staticmethod
    def sunset_light(intensity: float = 1.8) -> Light:
        return Light(Vector3(8.0, 4.0, 10.0), Vector3(1.0, 0.6, 0.3), intensity)

    @staticmethod
    def moonlight(intensity: float = 0.8) -> Light:
        return Light(Vector3(-3.0, 7.0, 6.0), Vector3(0.6, 0.65, 0.9), intensity)
