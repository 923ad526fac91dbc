"""Build an untrained 4-class plant model so the app can start without a trained artifact."""

import json
from datetime import date
from pathlib import Path

from tensorflow.keras.applications import MobileNetV2
from tensorflow.keras.layers import GlobalAveragePooling2D, Dense
from tensorflow.keras.models import Model

from plant_utils.config import DEFAULT_CLASS_NAMES, DEFAULT_MODEL_PATH, IMG_SIZE, METADATA_PATH


def build_bootstrap_model(class_names=DEFAULT_CLASS_NAMES, weights="imagenet", alpha=1.0):
    base = MobileNetV2(
        weights=weights,
        include_top=False,
        input_shape=(*IMG_SIZE, 3),
        alpha=alpha,
    )
    base.trainable = False

    x = GlobalAveragePooling2D()(base.output)
    output = Dense(len(class_names), activation="softmax")(x)
    return Model(base.input, output)


def write_metadata(class_names, path: Path = METADATA_PATH):
    path.parent.mkdir(parents=True, exist_ok=True)
    metadata = {
        "model_name": "mobilenetv2_plant_bootstrap",
        "version": "bootstrap",
        "classes": {str(i): lbl for i, lbl in enumerate(class_names)},
        "last_updated": date.today().isoformat(),
    }
    path.write_text(json.dumps(metadata, indent=2))
    return metadata


def main(model_path: Path = DEFAULT_MODEL_PATH, metadata_path: Path = METADATA_PATH):
    model = build_bootstrap_model()
    model_path.parent.mkdir(parents=True, exist_ok=True)
    model.save(model_path)
    write_metadata(DEFAULT_CLASS_NAMES, metadata_path)
    print(f"✅ Bootstrap model saved at {model_path}")


if __name__ == "__main__":
    main()
