import json

import numpy as np
import pytest

tf = pytest.importorskip("tensorflow")

from plant_utils import model as model_module
from plant_utils.config import DEFAULT_CLASS_NAMES, load_class_names
from plant_utils.errors import LabelMismatchError, ModelLoadError
from plant_utils.inference import run_inference


def tiny_model(outputs=4):
    inputs = tf.keras.Input(shape=(224, 224, 3))
    x = tf.keras.layers.GlobalAveragePooling2D()(inputs)
    out = tf.keras.layers.Dense(outputs, activation="softmax")(x)
    return tf.keras.Model(inputs, out)


@pytest.fixture
def saved_model_path(tmp_path):
    path = tmp_path / "plant.keras"
    tiny_model().save(str(path))
    return path


def test_load_and_predict(saved_model_path):
    model = model_module.load_plant_model(str(saved_model_path), class_names=DEFAULT_CLASS_NAMES)
    scores = run_inference(model, np.zeros((1, 224, 224, 3), dtype=np.float32))
    assert scores.shape == (4,)


def test_missing_file_raises_model_load_error(tmp_path):
    with pytest.raises(ModelLoadError):
        model_module.load_plant_model(str(tmp_path / "nope.h5"))


def test_corrupt_file_raises_model_load_error(tmp_path):
    bad = tmp_path / "broken.keras"
    bad.write_bytes(b"definitely not a zip archive")
    with pytest.raises(ModelLoadError):
        model_module.load_plant_model(str(bad))


def test_output_width_must_match_labels(tmp_path):
    path = tmp_path / "three.keras"
    tiny_model(outputs=3).save(str(path))
    with pytest.raises(LabelMismatchError):
        model_module.load_plant_model(str(path), class_names=DEFAULT_CLASS_NAMES)


def test_remote_model_is_downloaded(monkeypatch, tmp_path, saved_model_path):
    payload = saved_model_path.read_bytes()

    class FakeStream:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def raise_for_status(self):
            pass

        def iter_content(self, chunk_size=1):
            yield payload

    monkeypatch.setattr(model_module.requests, "get", lambda url, stream, timeout: FakeStream())
    monkeypatch.setattr(model_module, "MODELS_DIR", tmp_path / "models")

    path = model_module._download_model("https://example.org/models/plant.keras", tmp_path / "models")
    assert path.read_bytes() == payload
    model = model_module.load_plant_model("https://example.org/models/plant.keras")
    assert model.output_shape[-1] == 4


def test_class_names_from_metadata(tmp_path):
    meta = tmp_path / "model_metadata.json"
    meta.write_text(json.dumps({"classes": {"1": "Rust", "0": "Healthy", "10": "Other", "2": "Scab"}}))
    assert load_class_names(meta) == ["Healthy", "Rust", "Scab", "Other"]


def test_class_names_default_without_metadata(tmp_path):
    assert load_class_names(tmp_path / "missing.json") == DEFAULT_CLASS_NAMES


def test_interrupted_download_leaves_no_partial_file(monkeypatch, tmp_path):
    class BrokenStream:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def raise_for_status(self):
            pass

        def iter_content(self, chunk_size=1):
            yield b"first chunk"
            raise model_module.requests.ConnectionError("connection reset")

    monkeypatch.setattr(model_module.requests, "get", lambda url, stream, timeout: BrokenStream())
    target_dir = tmp_path / "models"

    with pytest.raises(model_module.requests.ConnectionError):
        model_module._download_model("https://example.org/models/plant.keras", target_dir)
    assert list(target_dir.iterdir()) == []

    monkeypatch.setattr(model_module, "MODELS_DIR", target_dir)
    with pytest.raises(ModelLoadError):
        model_module.load_plant_model("https://example.org/models/plant.keras")
    assert list(target_dir.iterdir()) == []
