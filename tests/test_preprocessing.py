import io

import numpy as np
import pytest
from PIL import Image

from plant_utils.errors import DecodeError
from plant_utils.preprocessing import preprocess_image

from conftest import image_bytes


def test_output_shape_and_dtype(solid_png):
    x = preprocess_image(solid_png)
    assert x.shape == (1, 224, 224, 3)
    assert x.dtype == np.float32


def test_values_are_not_rescaled():
    x = preprocess_image(image_bytes(color=(200, 10, 0), size=(50, 80)))
    assert x.shape == (1, 224, 224, 3)
    assert np.all(x[0, :, :, 0] == 200.0)
    assert np.all(x[0, :, :, 1] == 10.0)
    assert np.all(x[0, :, :, 2] == 0.0)


def test_alpha_channel_dropped():
    x = preprocess_image(image_bytes(color=(1, 2, 3, 128), mode="RGBA"))
    assert x.shape[-1] == 3


def test_grayscale_expanded_to_rgb():
    x = preprocess_image(image_bytes(color=77, mode="L", fmt="JPEG"))
    assert x.shape == (1, 224, 224, 3)


def test_nearest_neighbour_keeps_original_values():
    # two-colour image: no blended values may appear after resizing
    img = Image.new("RGB", (10, 10), (0, 0, 0))
    for x in range(5, 10):
        for y in range(10):
            img.putpixel((x, y), (255, 255, 255))
    buf = io.BytesIO()
    img.save(buf, format="PNG")

    out = preprocess_image(buf.getvalue())
    assert set(np.unique(out)) <= {0.0, 255.0}


@pytest.mark.parametrize("data", [b"", b"not an image"])
def test_undecodable_bytes_raise_decode_error(data):
    with pytest.raises(DecodeError):
        preprocess_image(data)
