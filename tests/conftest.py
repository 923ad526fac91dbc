import io

import numpy as np
import pytest
from PIL import Image

from plant_app.state import UploadedImage


def image_bytes(color=(34, 139, 34), size=(224, 224), mode="RGB", fmt="PNG"):
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


class FakeModel:
    """Stands in for a Keras model; returns fixed scores and records inputs."""

    def __init__(self, scores):
        self.scores = np.asarray([scores], dtype=np.float32)
        self.inputs = []

    def predict(self, x, verbose=0):
        self.inputs.append(x)
        return self.scores


class FailingModel:
    def predict(self, x, verbose=0):
        raise RuntimeError("graph execution failed")


@pytest.fixture
def solid_png():
    return image_bytes()


@pytest.fixture
def uploaded_image(solid_png):
    return UploadedImage(name="leaf.png", data=solid_png, mime_type="image/png")


@pytest.fixture
def saved():
    return []


@pytest.fixture
def recording_persister(saved):
    def persist(image_url, prediction):
        saved.append((image_url, prediction))
        return True

    return persist


@pytest.fixture
def echo_explainer():
    return lambda prediction: f"About {prediction}"
