"""Failure kinds raised along the prediction pipeline.

The UI only ever shows one generic message per failure, but the controller
records which of these was raised so callers can tell them apart.
"""


class PredictorError(Exception):
    """Base class for every pipeline failure."""

    kind = "PredictorError"


class ModelLoadError(PredictorError):
    kind = "ModelLoadError"


class DecodeError(PredictorError):
    kind = "DecodeError"


class InferenceError(PredictorError):
    kind = "InferenceError"


class ExplanationFetchError(PredictorError):
    kind = "ExplanationFetchError"


class LabelMismatchError(PredictorError):
    """Label table and model output disagree in length."""

    kind = "LabelMismatchError"
