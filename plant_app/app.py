# ======================================================
# Plant Disease Predictor: Streamlit front end
# ======================================================

import os
import sys
import asyncio
import logging
from pathlib import Path

import streamlit as st

# ======================================================
# PATHS
# ======================================================
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from plant_app.controller import PredictorController
from plant_app.state import Status, UploadedImage
from plant_utils import config
from plant_utils.config import load_class_names
from plant_utils.model import load_plant_model

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def resolve_backend_url():
    # Streamlit Cloud provides secrets in TOML; prefer env var but fall back to Streamlit secrets when available
    url = os.environ.get("PREDICTOR_BACKEND_URL")
    if url:
        return url
    try:
        return st.secrets.get("PREDICTOR_BACKEND_URL") or config.BACKEND_URL
    except FileNotFoundError:
        return config.BACKEND_URL


BACKEND_URL = resolve_backend_url()

if config.USE_MOCK_API:
    from plant_app.utils import mock_api_client as client
    CLIENT_KIND = "mock"
else:
    from plant_app.utils import api_client as client
    CLIENT_KIND = "HTTP"

# ======================================================
# STREAMLIT CONFIG
# ======================================================
st.set_page_config(page_title="Plant Disease Predictor", page_icon="🌿", layout="centered")


# ======================================================
# HELPERS
# ======================================================
@st.cache_resource(show_spinner="Loading prediction model...")
def load_cached_model():
    return load_plant_model(config.MODEL_URL, class_names=load_class_names())


def explain(prediction):
    return client.fetch_explanation(prediction, base_url=BACKEND_URL)


def persist(image_url, prediction):
    return client.save_prediction(image_url, prediction, base_url=BACKEND_URL)


def get_controller() -> PredictorController:
    if "controller" not in st.session_state:
        controller = PredictorController(
            loader=load_cached_model,
            explainer=explain,
            persister=persist,
            class_names=load_class_names(),
        )
        asyncio.run(controller.load_model())
        st.session_state.controller = controller
    return st.session_state.controller


# ======================================================
# SESSION SAFETY
# ======================================================
for k, default in [("last_image_hash", None), ("uploader_key", 0)]:
    if k not in st.session_state:
        st.session_state[k] = default

controller = get_controller()

# ======================================================
# HEADER
# ======================================================
st.title("🌿 Plant Disease Predictor")
st.caption(
    "Upload an image of a plant to get an AI-powered disease prediction and treatment advice"
)

with st.expander("ℹ️ Service Information", expanded=False):
    st.markdown(
        f"""
**Model location:** `{config.MODEL_URL}`  
**Backend:** `{BACKEND_URL}`  
**Explanation client:** {CLIENT_KIND}
"""
    )

# ======================================================
# IMAGE UPLOAD
# ======================================================
uploaded_file = st.file_uploader(
    "Click to upload an image",
    type=["jpg", "jpeg", "png", "webp", "bmp"],
    key=f"image-upload-{st.session_state.uploader_key}",
)

if not uploaded_file:
    # picker cleared; forget the digest so re-adding the same file is analysed again
    st.session_state.last_image_hash = None
else:
    image = UploadedImage.from_upload(uploaded_file)
    if st.session_state.last_image_hash != image.digest and controller.model_ready:
        st.session_state.last_image_hash = image.digest
        logger.info("Analyzing upload %s (%s)", image.name, image.digest)
        with st.spinner("Analyzing image..."):
            asyncio.run(controller.handle_upload(image))

if controller.image is not None:
    st.image(controller.image.data, caption="Uploaded plant", width="content")
else:
    st.info("🖼️ Click above to upload an image, or drag and drop one.")

# ======================================================
# RESULT
# ======================================================
state = controller.state

if state.status is Status.ERROR:
    st.error(f"**Error:** {state.error}")

if state.status is Status.SUCCESS:
    st.subheader("🔍 AI Prediction")
    st.markdown(f"The plant appears to be affected by: **{state.prediction}**")
    if state.explanation:
        st.subheader("📝 Detailed Analysis")
        st.markdown(state.explanation)

# ======================================================
# RESET
# ======================================================
if st.button("Upload New Image"):
    st.session_state.uploader_key += 1
    st.session_state.last_image_hash = None
    st.rerun()
