# plant_api/main.py
import os
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import google.generativeai as genai
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from plant_utils.config import LOG_DIR

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

_log_lock = threading.Lock()


# ----------------------------
# Schemas
# ----------------------------
class PromptRequest(BaseModel):
    prompt: str


class TextResponse(BaseModel):
    text: str


class SavePredictionRequest(BaseModel):
    imageUrl: str
    prediction: str


# ----------------------------
# Text generation
# ----------------------------
_generator = None


def get_generator():
    """Configure Gemini once; None when no API key is set."""
    global _generator
    if _generator is None:
        api_key = os.environ.get("GEMINI_API_KEY")
        if not api_key:
            return None
        genai.configure(api_key=api_key)
        model_id = os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
        _generator = genai.GenerativeModel(model_id)
        logger.info("Text generation uses %s", model_id)
    return _generator


def predictions_log_path() -> Path:
    return LOG_DIR / "predictions_log.csv"


# ----------------------------
# FastAPI app
# ----------------------------
app = FastAPI(title="Plant Disease Predictor API")


@app.get("/")
def health():
    return {
        "status": "ok",
        "text_generation": bool(os.environ.get("GEMINI_API_KEY")),
    }


@app.post("/api/gemini-pro", response_model=TextResponse)
def gemini_pro(body: PromptRequest):
    generator = get_generator()
    if generator is None:
        raise HTTPException(status_code=503, detail="Text generation is not configured")
    try:
        response = generator.generate_content(body.prompt)
        return TextResponse(text=response.text)
    except Exception as e:
        logger.exception("Error generating text: %s", e)
        raise HTTPException(status_code=502, detail=f"Text generation failed: {e}")


@app.post("/api/save-image-prediction")
def save_image_prediction(body: SavePredictionRequest):
    log_path = predictions_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    entry = {
        "image_url": body.imageUrl,
        "prediction": body.prediction,
        "saved_at": datetime.now(timezone.utc).isoformat(),
    }
    with _log_lock:
        pd.DataFrame([entry]).to_csv(
            log_path, mode="a", header=not log_path.exists(), index=False
        )
    logger.info("Saved prediction %s for %s", body.prediction, body.imageUrl)

    return {"status": "success"}
