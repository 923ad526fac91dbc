import numpy as np

from plant_utils.errors import InferenceError


def run_inference(model, x: np.ndarray) -> np.ndarray:
    """Forward pass for a single-image batch; returns the raw 1-D score vector."""
    try:
        preds = model.predict(x, verbose=0)
    except Exception as e:
        raise InferenceError(f"Inference failed: {e}") from e
    preds = np.asarray(preds)
    if preds.ndim == 2 and preds.shape[0] == 1:
        preds = preds[0]
    return preds.reshape(-1)
