"""
img2ppt: Convert slide images into editable PPTX.

Separates text from background art with a vision model, then reconstructs
each text element as a positioned, styled object on a slide canvas.
"""

__version__ = "0.1.0"
__author__ = "img2ppt Team"

from img2ppt.config import LayoutConfig
from img2ppt.models import TextElement, CanvasSpec, SlideLayout, SlideObject
from img2ppt.pipeline import Img2PPTPipeline

__all__ = [
    "CanvasSpec",
    "Img2PPTPipeline",
    "LayoutConfig",
    "SlideLayout",
    "SlideObject",
    "TextElement",
]
