"""
Replay detector: re-use detections saved by an earlier pipeline run.

Useful for re-rendering with different layout settings without paying for
another round of vision API calls.
"""

import json
from pathlib import Path
from typing import List

from pydantic import ValidationError

from img2ppt.detectors.base import BaseDetector
from img2ppt.errors import DetectionError, BackgroundCleaningError
from img2ppt.models import SourceImage, TextElement

ELEMENTS_SUFFIX = ".elements.json"
BACKGROUND_SUFFIX = ".background.png"


def elements_path(assets_dir: Path, image: SourceImage) -> Path:
    return Path(assets_dir) / f"{image.path.stem}{ELEMENTS_SUFFIX}"


def background_path(assets_dir: Path, image: SourceImage) -> Path:
    return Path(assets_dir) / f"{image.path.stem}{BACKGROUND_SUFFIX}"


class ReplayDetector(BaseDetector):
    """Serve detections and cleaned backgrounds from a previous run's assets directory."""

    def __init__(self, assets_dir: Path):
        super().__init__()
        self.assets_dir = Path(assets_dir)
        if not self.assets_dir.is_dir():
            raise FileNotFoundError(f"Detections directory not found: {self.assets_dir}")

    def detect(self, image: SourceImage) -> List[TextElement]:
        path = elements_path(self.assets_dir, image)
        if not path.exists():
            raise DetectionError(f"No saved detections for {image.path.name}: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            elements = [TextElement.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise DetectionError(f"Corrupt detections file {path}: {e}") from e

        print(f"[Replay] Loaded {len(elements)} elements from {path.name}")
        return elements

    def clean_background(self, image: SourceImage) -> bytes:
        path = background_path(self.assets_dir, image)
        if not path.exists():
            raise BackgroundCleaningError(f"No saved background for {image.path.name}: {path}")
        return path.read_bytes()
