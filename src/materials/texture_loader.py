# materials/texture_loader.py
import os
import numpy as np
from PIL import Image, UnidentifiedImageError

def load_texture(image_path: str) -> np.ndarray:
    """
    Load an image file as texel data, with automatic format conversion.

    Args:
        image_path: Path to the image file

    Returns:
        (height, width, 3) float32 array with channels in [0, 1]

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            return np.asarray(img, dtype=np.float32) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {str(e)}") from e

def save_texture(data: np.ndarray, image_path: str):
    """Write (height, width, 3) texel data in [0, 1] to an image file."""
    pixels = (np.clip(data, 0.0, 1.0) * 255.0).astype(np.uint8)
    Image.fromarray(pixels).save(image_path)
