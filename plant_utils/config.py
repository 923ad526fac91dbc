import os
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ----------------------------
# Paths
# ----------------------------
ROOT = Path(__file__).resolve().parents[1]
MODELS_DIR = ROOT / "models"
METADATA_PATH = MODELS_DIR / "model_metadata.json"
DEFAULT_MODEL_PATH = MODELS_DIR / "plant_disease_model.h5"

IMG_SIZE = (224, 224)
DEFAULT_CLASS_NAMES = ["Healthy", "Powdery Mildew", "Rust", "Scab"]

# ----------------------------
# Environment
# ----------------------------
MODEL_URL = os.environ.get("PREDICTOR_MODEL_URL", str(DEFAULT_MODEL_PATH))
BACKEND_URL = os.environ.get("PREDICTOR_BACKEND_URL", "http://localhost:8000")
EXPLANATION_PATH = os.environ.get("PREDICTOR_EXPLANATION_PATH", "/api/gemini-pro")
PERSISTENCE_PATH = os.environ.get("PREDICTOR_PERSISTENCE_PATH", "/api/save-image-prediction")
REQUEST_TIMEOUT = float(os.environ.get("PREDICTOR_REQUEST_TIMEOUT", "60"))
USE_MOCK_API = os.environ.get("PREDICTOR_USE_MOCK_API", "").lower() in ("1", "true", "yes")
LOG_DIR = Path(os.environ.get("PREDICTOR_LOG_DIR", str(ROOT / "prediction_log")))


def endpoint_url(path: str, base_url: str | None = None) -> str:
    base = base_url or BACKEND_URL
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def load_class_names(metadata_path: Path = METADATA_PATH) -> list[str]:
    """Read the label table from model metadata, ordered by class index.

    Falls back to the built-in four labels when no metadata is present.
    """
    if not metadata_path.exists():
        return list(DEFAULT_CLASS_NAMES)
    metadata = json.loads(metadata_path.read_text())
    classes = metadata.get("classes", {})
    if not classes:
        logger.warning("No classes in %s, using defaults", metadata_path)
        return list(DEFAULT_CLASS_NAMES)
    if isinstance(classes, list):
        return [str(c) for c in classes]
    return [str(classes[k]) for k in sorted(classes, key=int)]
