import io

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from plant_utils.config import IMG_SIZE
from plant_utils.errors import DecodeError


def load_image_with_orientation(data: bytes) -> Image.Image:
    """Decode image bytes and auto-rotate mobile/desktop photos."""
    try:
        img = Image.open(io.BytesIO(data))
        img = ImageOps.exif_transpose(img)
        return img.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e


def preprocess_image(data: bytes, size=IMG_SIZE) -> np.ndarray:
    """
    Turn raw image bytes into the model input tensor.
    Nearest-neighbour resize, float32 channel values (not rescaled),
    leading batch axis: shape (1, height, width, 3).
    """
    img = load_image_with_orientation(data)
    img_resized = img.resize(size, resample=Image.NEAREST)
    x = np.asarray(img_resized, dtype=np.float32)
    return np.expand_dims(x, axis=0)
