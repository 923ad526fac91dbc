import logging

import requests

from plant_utils.config import (
    EXPLANATION_PATH,
    PERSISTENCE_PATH,
    REQUEST_TIMEOUT,
    endpoint_url,
)
from plant_utils.errors import ExplanationFetchError

logger = logging.getLogger(__name__)


def _post_json(url: str, payload: dict, timeout: float = REQUEST_TIMEOUT):
    r = requests.post(url, json=payload, timeout=timeout)
    r.raise_for_status()
    return r


def build_prompt(prediction: str) -> str:
    return f"Generate a response for the plant disease prediction: {prediction}"


def fetch_explanation(prediction: str, base_url: str | None = None) -> str:
    """Ask the text-generation endpoint to explain a predicted label."""
    url = endpoint_url(EXPLANATION_PATH, base_url)
    try:
        body = _post_json(url, {"prompt": build_prompt(prediction)}).json()
    except (requests.RequestException, ValueError) as e:
        raise ExplanationFetchError(f"Explanation request failed: {e}") from e

    text = body.get("text") if isinstance(body, dict) else None
    if not isinstance(text, str):
        raise ExplanationFetchError(f"Unexpected explanation response: {body!r}")
    return text


def save_prediction(image_url: str, prediction: str, base_url: str | None = None) -> bool:
    """
    Forward the image reference and label to the storage endpoint.
    Failures are logged and never raised.
    """
    url = endpoint_url(PERSISTENCE_PATH, base_url)
    try:
        _post_json(url, {"imageUrl": image_url, "prediction": prediction})
    except requests.RequestException as e:
        logger.error("Error saving prediction to %s: %s", url, e)
        return False
    return True
