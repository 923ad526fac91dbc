from dataclasses import dataclass

import numpy as np

from plant_utils.errors import LabelMismatchError


@dataclass(frozen=True)
class Prediction:
    index: int
    label: str
    score: float


def top_prediction(scores, class_names) -> Prediction:
    """
    Pick the highest-scoring class.
    Exact ties go to the lowest index; scores need not be normalised.
    """
    scores = np.asarray(scores).reshape(-1)
    if len(scores) == 0 or len(scores) != len(class_names):
        raise LabelMismatchError(
            f"Model produced {len(scores)} scores but {len(class_names)} labels are configured"
        )
    idx = int(np.argmax(scores))
    return Prediction(index=idx, label=class_names[idx], score=float(scores[idx]))
