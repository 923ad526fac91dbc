"""Upload pipeline and view-state owner for the predictor page.

All state lives on one PredictorController instance. Blocking work (model
load, decode, inference, HTTP) runs in worker threads; state is only written
from the event loop.
"""

import asyncio
import logging

from plant_app.state import UploadedImage, ViewState
from plant_utils.config import DEFAULT_CLASS_NAMES
from plant_utils.errors import ModelLoadError, PredictorError
from plant_utils.inference import run_inference
from plant_utils.postprocess import top_prediction
from plant_utils.preprocessing import preprocess_image

logger = logging.getLogger(__name__)

MODEL_LOAD_MESSAGE = "Failed to load the prediction model. Please try again later."
ANALYSIS_MESSAGE = "An error occurred while analyzing the image. Please try again."


class PredictorController:
    def __init__(self, loader, explainer, persister, class_names=None):
        self._loader = loader
        self._explainer = explainer
        self._persister = persister
        self.class_names = list(class_names or DEFAULT_CLASS_NAMES)

        self.model = None
        self.image: UploadedImage | None = None
        self.state = ViewState.idle()
        self.generation = 0

    @property
    def model_ready(self):
        return self.model is not None

    # ------------------------------
    # Model loading
    # ------------------------------
    async def load_model(self):
        if self.model is not None:
            return self.model
        try:
            model = await asyncio.to_thread(self._loader)
        except Exception as e:
            logger.exception("Error loading model: %s", e)
            kind = e.kind if isinstance(e, PredictorError) else ModelLoadError.kind
            self.state = ViewState.failed(MODEL_LOAD_MESSAGE, kind)
            return None
        self.model = model
        logger.info("Prediction model ready")
        return model

    # ------------------------------
    # Upload handling
    # ------------------------------
    def submit_upload(self, image: UploadedImage) -> asyncio.Task:
        """Schedule an upload on the running loop and return its task."""
        return asyncio.get_running_loop().create_task(self.handle_upload(image))

    def _is_current(self, generation):
        return generation == self.generation

    async def handle_upload(self, image: UploadedImage):
        """
        Run the whole pipeline for one upload.
        Returns the ViewState this run produced, or None if the upload was
        ignored (no model yet) or superseded by a newer upload.
        """
        if image is None or self.model is None:
            logger.info("Ignoring upload: model not ready")
            return None

        self.generation += 1
        generation = self.generation
        self.image = image
        self.state = ViewState.loading()

        result = None
        try:
            x = await asyncio.to_thread(preprocess_image, image.data)
            if not self._is_current(generation):
                return None
            scores = await asyncio.to_thread(run_inference, self.model, x)
            if not self._is_current(generation):
                return None
            predicted = top_prediction(scores, self.class_names).label

            await asyncio.to_thread(self._forward, image.url, predicted)
            explanation = await asyncio.to_thread(self._explainer, predicted)
            if not self._is_current(generation):
                return None
            result = ViewState.success(predicted, explanation)
        except PredictorError as e:
            if not self._is_current(generation):
                return None
            logger.exception("Error analyzing image: %s", e)
            result = ViewState.failed(ANALYSIS_MESSAGE, e.kind)
        except Exception as e:
            if not self._is_current(generation):
                return None
            logger.exception("Unexpected error analyzing image: %s", e)
            result = ViewState.failed(ANALYSIS_MESSAGE, type(e).__name__)
        finally:
            if self._is_current(generation):
                self.state = result or ViewState.failed(ANALYSIS_MESSAGE)
            else:
                logger.info("Discarding stale result for upload %d", generation)
        return result

    def _forward(self, image_url, prediction):
        try:
            self._persister(image_url, prediction)
        except Exception as e:
            logger.error("Error saving to the database: %s", e)
