# materials/presets.py
from dataclasses import replace
from core.vector import Vector3
from materials.material import Material

# Texture ids used by the demo scene; main.py registers an image under each
BALL_TEXTURE = "assets/ball.png"
BALL_NORMAL = "assets/ball_normal.png"
BRICKS_TEXTURE = "assets/bricks.png"
BRICKS_NORMAL = "assets/bricks_normal.png"
GRASS_TEXTURE = "assets/grass_dirt.png"
GRASS_NORMAL = "assets/grass_dirt_normal.png"
STONE_TEXTURE = "assets/castle_stone.png"
STONE_NORMAL = "assets/castle_stone_normal.png"
WATER_TEXTURE = "assets/water_waves.png"
WATER_NORMAL = "assets/water_normal.png"
LAVA_TEXTURE = "assets/lava_bubbles.png"
LAVA_NORMAL = "assets/lava_normal.png"

class MaterialPresets:
    """Predefined cube materials."""

    @staticmethod
    def rubber() -> Material:
        return Material(Vector3(0.3, 0.1, 0.1), 10.0, (0.9, 0.1, 0.0, 0.0), 0.0,
                        BALL_TEXTURE, BALL_NORMAL)

    @staticmethod
    def bricks() -> Material:
        return Material(Vector3(0.8, 0.2, 0.1), 20.0, (0.8, 0.2, 0.0, 0.0), 0.0,
                        BRICKS_TEXTURE, BRICKS_NORMAL)

    @staticmethod
    def ivory() -> Material:
        return Material(Vector3(0.4, 0.4, 0.3), 50.0, (0.6, 0.3, 0.1, 0.0), 0.0)

    @staticmethod
    def glass() -> Material:
        return Material(Vector3(0.6, 0.7, 0.8), 125.0, (0.0, 0.5, 0.1, 0.8), 1.5)

    @staticmethod
    def grass() -> Material:
        # Matte, barely reflective
        return Material(Vector3(0.4, 0.6, 0.2), 15.0, (0.8, 0.1, 0.05, 0.0), 1.0,
                        GRASS_TEXTURE, GRASS_NORMAL)

    @staticmethod
    def castle_stone() -> Material:
        return Material(Vector3(0.5, 0.5, 0.55), 35.0, (0.7, 0.2, 0.08, 0.0), 1.0,
                        STONE_TEXTURE, STONE_NORMAL)

    @staticmethod
    def water() -> Material:
        # reflect + transmit exceed 1; kept as authored
        return Material(Vector3(0.1, 0.3, 0.8), 80.0, (0.1, 0.1, 0.7, 0.8), 1.33,
                        WATER_TEXTURE, WATER_NORMAL)

    @staticmethod
    def lava() -> Material:
        return Material(Vector3(1.0, 0.3, 0.1), 25.0, (0.9, 0.3, 0.05, 0.0), 1.0,
                        LAVA_TEXTURE, LAVA_NORMAL)

    @staticmethod
    def crystal() -> Material:
        return Material(Vector3(0.9, 0.9, 1.0), 150.0, (0.05, 0.1, 0.8, 0.95), 1.5)

    @staticmethod
    def emerald() -> Material:
        return replace(MaterialPresets.crystal(), diffuse=Vector3(0.1, 0.9, 0.3))

    @staticmethod
    def ruby() -> Material:
        return replace(MaterialPresets.crystal(), diffuse=Vector3(0.9, 0.1, 0.2))

    @staticmethod
    def sapphire() -> Material:
        return replace(MaterialPresets.crystal(), diffuse=Vector3(0.1, 0.3, 0.9))

    @staticmethod
    def wood() -> Material:
        return Material(Vector3(0.6, 0.4, 0.2), 10.0, (0.8, 0.15, 0.05, 0.0), 1.0)

    @staticmethod
    def leaves() -> Material:
        return Material(Vector3(0.2, 0.8, 0.3), 5.0, (0.9, 0.1, 0.0, 0.0), 1.0)

    @staticmethod
    def dark_stone() -> Material:
        return Material(Vector3(0.3, 0.3, 0.35), 20.0, (0.6, 0.3, 0.1, 0.0), 1.0,
                        STONE_TEXTURE, STONE_NORMAL)
