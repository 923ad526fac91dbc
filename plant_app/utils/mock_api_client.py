# plant_app/utils/mock_api_client.py
import logging

logger = logging.getLogger(__name__)

# -----------------------
# Mock API functions
# -----------------------

MOCK_EXPLANATIONS = {
    "Healthy": "The leaf shows no visible signs of disease. Keep watering and feeding as usual.",
    "Powdery Mildew": (
        "Powdery mildew is a fungal disease that leaves white, dusty patches on leaves.\n"
        "Remove affected leaves, improve air flow and avoid overhead watering."
    ),
    "Rust": (
        "Rust shows up as orange or brown pustules on the underside of leaves.\n"
        "Prune infected growth and apply a suitable fungicide."
    ),
    "Scab": (
        "Scab causes dark, scabby lesions on leaves and fruit.\n"
        "Rake up fallen leaves and spray early in the season."
    ),
}


def fetch_explanation(prediction, base_url=None):
    return MOCK_EXPLANATIONS.get(prediction, f"No notes available for {prediction}.")


def save_prediction(image_url, prediction, base_url=None):
    # Just log it locally
    logger.info("Mock save: %s -> %s", image_url, prediction)
    return True
