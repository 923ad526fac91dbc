import logging
from pathlib import Path
from urllib.parse import urlparse

import requests
import tensorflow as tf

from plant_utils.config import MODELS_DIR, MODEL_URL, REQUEST_TIMEOUT
from plant_utils.errors import LabelMismatchError, ModelLoadError

logger = logging.getLogger(__name__)


# ------------------------------
# Locate model artifact
# ------------------------------
def _is_remote(location: str) -> bool:
    return urlparse(str(location)).scheme in ("http", "https")


def _download_model(url: str, target_dir: Path | None = None) -> Path:
    """Fetch a remote model file into the models directory (once)."""
    target_dir = target_dir or MODELS_DIR
    filename = Path(urlparse(url).path).name or "remote_model.h5"
    target = target_dir / filename
    if target.exists() and target.stat().st_size > 0:
        return target
    target_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading model from %s", url)
    with requests.get(url, stream=True, timeout=REQUEST_TIMEOUT) as r:
        r.raise_for_status()
        tmp = target.with_suffix(target.suffix + ".part")
        try:
            with open(tmp, "wb") as f:
                for chunk in r.iter_content(chunk_size=1 << 20):
                    f.write(chunk)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        tmp.replace(target)
    return target


def resolve_model_path(location: str = MODEL_URL) -> Path:
    if _is_remote(location):
        return _download_model(location)
    return Path(location)


# ------------------------------
# Load model
# ------------------------------
def load_plant_model(location: str = MODEL_URL, class_names=None):
    """
    Load the classifier from a local path or an http(s) URL. Every failure surfaces as ModelLoadError,
    except a label table that does not fit the model's output width.
    """
    try:
        path = resolve_model_path(location)
    except requests.RequestException as e:
        raise ModelLoadError(f"Cannot download model from {location}: {e}") from e
    if not path.exists():
        raise ModelLoadError(f"Cannot find model at {path}")

    try:
        model = tf.keras.models.load_model(str(path), compile=False)
    except Exception as e:
        raise ModelLoadError(f"Model load failed: {e}") from e
    logger.info("Loaded model from %s", path)

    if class_names is not None:
        check_output_width(model, class_names)
    return model


def check_output_width(model, class_names) -> None:
    shape = getattr(model, "output_shape", None)
    if not shape or not isinstance(shape, tuple):
        return
    width = shape[-1]
    if width is not None and width != len(class_names):
        raise LabelMismatchError(
            f"Model outputs {width} classes but {len(class_names)} labels are configured"
        )

