# renderer/skybox.py
from enum import Enum
from typing import Optional
from core.vector import Vector3

# Background used when no preset is selected
SKYBOX_COLOR = Vector3(0.26, 0.55, 0.89)

_I32_MIN = -2147483648
_I32_MAX = 2147483647

def _to_i32(value: float) -> int:
    """Float to int32 conversion that saturates instead of overflowing."""
    if value != value:
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)

def _wrap_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value > _I32_MAX else value

def procedural_noise(p: Vector3) -> float:
    """Hash-based value noise in [0, 1]. Deterministic for a given point."""
    h = _to_i32(p.x * 73856093.0) ^ _to_i32(p.y * 19349663.0) ^ _to_i32(p.z * 83492791.0)
    h = _wrap_i32((h ^ (h >> 13)) * 1274126177)
    h = h ^ (h >> 16)
    return abs(h / 2147483647.0)

class SkyboxType(Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    ATMOSPHERIC_SUNSET = "atmospheric_sunset"
    STARRY_NIGHT = "starry_night"
    CLOUDY_SKY = "cloudy_sky"
    SPACE = "space"

class Skybox:
    """
    Procedural background. get_color maps a unit ray direction to a color
    and depends on nothing but the parameters fixed at construction.
    """
    def __init__(self, skybox_type: SkyboxType,
                 color: Optional[Vector3] = None,
                 bottom_color: Optional[Vector3] = None):
        self.skybox_type = skybox_type
        self.color = color if color is not None else SKYBOX_COLOR
        self.bottom_color = bottom_color if bottom_color is not None else self.color
        self.sun_direction = Vector3(0.3, 0.8, 0.5).normalize()
        self.time_of_day = 0.6  # 0 = midnight, 0.5 = noon

    def with_sun_direction(self, direction: Vector3) -> "Skybox":
        self.sun_direction = direction.normalize()
        return self

    def with_time_of_day(self, time: float) -> "Skybox":
        self.time_of_day = max(0.0, min(time, 1.0))
        return self

    def get_color(self, direction: Vector3) -> Vector3:
        if self.skybox_type is SkyboxType.SOLID:
            return self.color
        if self.skybox_type is SkyboxType.GRADIENT:
            return self._gradient(direction)
        if self.skybox_type is SkyboxType.ATMOSPHERIC_SUNSET:
            return self._atmospheric_sunset(direction)
        if self.skybox_type is SkyboxType.STARRY_NIGHT:
            return self._starry_night(direction)
        if self.skybox_type is SkyboxType.CLOUDY_SKY:
            return self._cloudy_sky(direction)
        return self._space(direction)

    def _gradient(self, direction: Vector3) -> Vector3:
        t = (direction.y + 1.0) * 0.5
        return self.bottom_color.lerp(self.color, t)

    def _atmospheric_sunset(self, direction: Vector3) -> Vector3:
        horizon_color = Vector3(1.0, 0.6, 0.3)
        zenith_color = Vector3(0.3, 0.7, 1.0)
        sun_color = Vector3(1.0, 0.9, 0.7)
        ground_color = Vector3(0.4, 0.3, 0.5)

        height_factor = (direction.y + 1.0) * 0.5
        if direction.y > 0.0:
            sky_color = zenith_color.lerp(horizon_color, (1.0 - height_factor) ** 0.8)
        else:
            sky_color = ground_color

        sun_dot = max(direction.dot(self.sun_direction), 0.0)
        sky_color = sky_color + sun_color * (sun_dot ** 32.0) * 2.0
        sky_color = sky_color + horizon_color * (sun_dot ** 4.0) * 0.3

        # Haze near the horizon
        atmosphere_factor = (1.0 - abs(direction.y)) ** 2.0
        return sky_color + Vector3(1.0, 0.4, 0.2) * atmosphere_factor * 0.1

    def _starry_night(self, direction: Vector3) -> Vector3:
        night_color = Vector3(0.02, 0.02, 0.08)
        star_color = Vector3(1.0, 1.0, 0.9)

        height_factor = (direction.y + 1.0) * 0.5
        sky_color = night_color * (0.5 + height_factor * 0.5)

        star_density = procedural_noise(direction * 100.0)
        if star_density > 0.98:
            brightness = (star_density - 0.98) / 0.02
            sky_color = sky_color + star_color * brightness * 0.8

        moon_direction = Vector3(-0.3, 0.7, 0.6).normalize()
        moon_intensity = max(direction.dot(moon_direction), 0.0) ** 128.0
        if moon_intensity > 0.3:
            sky_color = sky_color + Vector3(0.8, 0.8, 0.9) * moon_intensity * 0.5
        return sky_color

    def _cloudy_sky(self, direction: Vector3) -> Vector3:
        sky_color = Vector3(0.6, 0.7, 0.9)
        cloud_color = Vector3(0.9, 0.9, 0.95)
        dark_cloud = Vector3(0.4, 0.4, 0.45)

        height_factor = (direction.y + 1.0) * 0.5
        final_color = sky_color * (0.7 + height_factor * 0.3)

        # Three octaves of noise
        cloud_factor = (procedural_noise(direction * 5.0)
                        + procedural_noise(direction * 12.0) * 0.5
                        + procedural_noise(direction * 25.0) * 0.25) / 1.75

        if cloud_factor > 0.3:
            strength = min((cloud_factor - 0.3) / 0.7, 1.0)
            if cloud_factor > 0.6:
                mixed = cloud_color.lerp(dark_cloud, (cloud_factor - 0.6) * 2.5)
            else:
                mixed = cloud_color
            final_color = final_color.lerp(mixed, strength)
        return final_color

    def _space(self, direction: Vector3) -> Vector3:
        space_color = Vector3(0.01, 0.01, 0.03)
        nebula_color1 = Vector3(0.8, 0.2, 0.6)
        nebula_color2 = Vector3(0.2, 0.6, 0.9)
        star_color = Vector3(1.0, 1.0, 1.0)

        final_color = space_color

        nebula_noise1 = procedural_noise(direction * 3.0)
        nebula_noise2 = procedural_noise(direction * 7.0) * 0.5
        combined = nebula_noise1 + nebula_noise2
        if combined > 0.3:
            nebula = nebula_color1.lerp(nebula_color2, nebula_noise2)
            final_color = final_color + nebula * ((combined - 0.3) * 0.4)

        star_noise = procedural_noise(direction * 150.0)
        if star_noise > 0.95:
            final_color = final_color + star_color * ((star_noise - 0.95) / 0.05)

        if procedural_noise(direction * 300.0) > 0.98:
            final_color = final_color + star_color * 0.3
        return final_color

    # Presets

    @staticmethod
    def default() -> "Skybox":
        return Skybox(SkyboxType.SOLID, SKYBOX_COLOR)

    @staticmethod
    def solid(color: Vector3) -> "Skybox":
        return Skybox(SkyboxType.SOLID, color)

    @staticmethod
    def gradient(top_color: Vector3, bottom_color: Vector3) -> "Skybox":
        return Skybox(SkyboxType.GRADIENT, top_color, bottom_color)

    @staticmethod
    def sunset() -> "Skybox":
        return (Skybox(SkyboxType.ATMOSPHERIC_SUNSET)
                .with_sun_direction(Vector3(0.5, 0.3, 0.8))
                .with_time_of_day(0.8))

    @staticmethod
    def midday() -> "Skybox":
        return (Skybox.gradient(Vector3(0.3, 0.7, 1.0), Vector3(0.6, 0.8, 1.0))
                .with_sun_direction(Vector3(0.0, 1.0, 0.0)))

    @staticmethod
    def night() -> "Skybox":
        return Skybox(SkyboxType.STARRY_NIGHT).with_time_of_day(0.0)

    @staticmethod
    def overcast() -> "Skybox":
        return Skybox(SkyboxType.CLOUDY_SKY).with_time_of_day(0.5)

    @staticmethod
    def cosmic() -> "Skybox":
        return Skybox(SkyboxType.SPACE)

    @staticmethod
    def preset(name: str) -> "Skybox":
        factory = SKYBOX_PRESETS.get(name)
        if factory is None:
            raise ValueError(f"Unknown skybox preset: {name} (choose from {', '.join(SKYBOX_PRESETS)})")
        return factory()

SKYBOX_PRESETS = {
    "default": Skybox.default,
    "sunset": Skybox.sunset,
    "midday": Skybox.midday,
    "night": Skybox.night,
    "overcast": Skybox.overcast,
    "cosmic": Skybox.cosmic,
}
