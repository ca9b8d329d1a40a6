# materials/textures.py
from typing import Dict, Optional, Tuple
import numpy as np
from core.vector import Vector3
from materials.texture_loader import load_texture

class TextureManager:
    """
    Holds decoded images by id and answers texel lookups for the shader.

    Images are (height, width, 3) float arrays in [0, 1]. Normal maps use the
    usual encoding n = rgb * 2 - 1.
    """
    def __init__(self):
        self._textures: Dict[str, np.ndarray] = {}

    def __contains__(self, texture_id: str) -> bool:
        return texture_id in self._textures

    def __len__(self) -> int:
        return len(self._textures)

    def load_texture(self, image_path: str, texture_id: Optional[str] = None) -> str:
        """Decode an image file and register it under texture_id (default: the path)."""
        key = texture_id if texture_id is not None else image_path
        self._textures[key] = load_texture(image_path)
        return key

    def add_texture(self, texture_id: str, data: np.ndarray):
        data = np.asarray(data, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] != 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Texture '{texture_id}' must be a non-empty (height, width, 3) array, got {data.shape}")
        self._textures[texture_id] = data

    def get_texture(self, texture_id: str) -> np.ndarray:
        try:
            return self._textures[texture_id]
        except KeyError:
            raise KeyError(f"Texture '{texture_id}' is not loaded") from None

    def dimensions(self, texture_id: str) -> Tuple[int, int]:
        """(width, height) of a loaded texture."""
        data = self.get_texture(texture_id)
        return data.shape[1], data.shape[0]

    def texel_coords(self, texture_id: str, u: float, v: float) -> Tuple[int, int]:
        """Integer texel for surface coordinates (u, v), clamped to the image."""
        width, height = self.dimensions(texture_id)
        x = min(max(int(u * width), 0), width - 1)
        y = min(max(int(v * height), 0), height - 1)
        return x, y

    def get_pixel_color(self, texture_id: str, x: int, y: int) -> Vector3:
        r, g, b = self.get_texture(texture_id)[y, x]
        return Vector3(float(r), float(g), float(b))

    def get_normal_from_map(self, texture_id: str, x: int, y: int) -> Optional[Vector3]:
        """Tangent-space normal stored at (x, y), or None outside the image."""
        data = self.get_texture(texture_id)
        if not (0 <= x < data.shape[1] and 0 <= y < data.shape[0]):
            return None
        r, g, b = data[y, x]
        return Vector3(float(r) * 2.0 - 1.0, float(g) * 2.0 - 1.0, float(b) * 2.0 - 1.0).normalize()

###############################################################################
# Procedural texture generators
###############################################################################
def checker_texture(width: int, height: int, color1: Vector3, color2: Vector3,
                    scale: float = 8.0) -> np.ndarray:
    """A checker pattern texture."""
    xs = (np.arange(width) / width * scale).astype(int)
    ys = (np.arange(height) / height * scale).astype(int)
    is_even = (xs[None, :] + ys[:, None]) % 2 == 0
    data = np.where(is_even[..., None],
                    np.array(color1.to_tuple(), dtype=np.float32),
                    np.array(color2.to_tuple(), dtype=np.float32))
    return data.astype(np.float32)

def brick_texture(width: int, height: int, brick: Vector3, mortar: Vector3,
                  rows: int = 8, columns: int = 4, mortar_width: float = 0.06) -> np.ndarray:
    """Running-bond bricks; every other row is offset by half a brick."""
    v = np.arange(height)[:, None] / height * rows
    u = np.arange(width)[None, :] / width * columns
    row = np.floor(v)
    u = u + (row % 2) * 0.5
    fu = u - np.floor(u)
    fv = v - row
    is_mortar = (fu < mortar_width) | (fv < mortar_width * 2)
    # Slight per-brick shade variation
    shade = 0.85 + 0.15 * ((np.floor(u) * 7 + row * 13) % 5) / 4.0
    brick_rgb = np.array(brick.to_tuple(), dtype=np.float32) * shade[..., None]
    mortar_rgb = np.broadcast_to(np.array(mortar.to_tuple(), dtype=np.float32), brick_rgb.shape)
    return np.where(is_mortar[..., None], mortar_rgb, brick_rgb).astype(np.float32)

class ValueNoise:
    """Simple 2D Perlin-like noise."""
    def __init__(self, seed: Optional[int] = None):
        rng = np.random.default_rng(seed)
        # Permutation table, doubled to avoid wrapping
        self.p = rng.permutation(256).tolist() * 2

    def noise(self, x: float, y: float) -> float:
        def fade(t): return t * t * t * (t * (t * 6 - 15) + 10)

        xi = int(x) & 255
        yi = int(y) & 255
        xf = x - int(x)
        yf = y - int(y)
        u = fade(xf)
        v = fade(yf)

        aa = self.p[self.p[xi] + yi]
        ab = self.p[self.p[xi] + yi + 1]
        ba = self.p[self.p[xi + 1] + yi]
        bb = self.p[self.p[xi + 1] + yi + 1]

        # Blend, then squash into [0, 1]
        value = (aa + (ba - aa) * u) + ((ab - aa) * v + (bb - ba) * u * v)
        return value / 255.0

    def turbulence(self, x: float, y: float, octaves: int = 5) -> float:
        t = 0.0
        freq = 1.0
        amp = 1.0
        for _ in range(octaves):
            t += self.noise(x * freq, y * freq) * amp
            freq *= 2.0
            amp *= 0.5
        return t

def marble_texture(width: int, height: int, light: Vector3, dark: Vector3,
                   scale: float = 5.0, turbulence: float = 5.0, seed: Optional[int] = None) -> np.ndarray:
    """A marble-like procedural texture mixing two colors."""
    noise = ValueNoise(seed)
    data = np.empty((height, width, 3), dtype=np.float32)
    c1 = np.array(light.to_tuple(), dtype=np.float32)
    c2 = np.array(dark.to_tuple(), dtype=np.float32)
    for j in range(height):
        y = j / height * scale
        for i in range(width):
            x = i / width * scale
            value = (1 + np.sin(x + turbulence * noise.turbulence(x, y))) / 2
            data[j, i] = c1 * value + c2 * (1 - value)
    return data

def luminance(data: np.ndarray) -> np.ndarray:
    return 0.2126 * data[..., 0] + 0.7152 * data[..., 1] + 0.0722 * data[..., 2]

def normal_map_from_height(height_map: np.ndarray, strength: float = 2.0) -> np.ndarray:
    """
    Encodes the tangent-space normals of a (height, width) height field as
    an RGB normal map (rgb = n * 0.5 + 0.5).
    """
    dy, dx = np.gradient(height_map.astype(np.float32))
    nx = -dx * strength
    ny = -dy * strength
    nz = np.ones_like(nx)
    length = np.sqrt(nx * nx + ny * ny + nz * nz)
    normals = np.stack([nx / length, ny / length, nz / length], axis=-1)
    return (normals * 0.5 + 0.5).astype(np.float32)

def flat_normal_map(width: int = 1, height: int = 1) -> np.ndarray:
    """Normal map that leaves the geometric normal untouched."""
    return np.broadcast_to(np.array([0.5, 0.5, 1.0], dtype=np.float32), (height, width, 3)).copy()
