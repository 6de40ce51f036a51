"""
Detection adapters for finding slide text and cleaning backgrounds.

Supports:
- Gemini (vision analysis + generative inpainting), in img2ppt.detectors.gemini
- Replay (detections saved by a previous run)

The Gemini adapter is not imported here so that replay runs never load
google-genai.
"""

from img2ppt.detectors.base import BaseDetector
from img2ppt.detectors.replay import ReplayDetector

__all__ = ["BaseDetector", "ReplayDetector"]
