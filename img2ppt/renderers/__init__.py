"""
PPTX renderers for generating editable PowerPoint files.

Supports python-pptx for deterministic generation.
"""

from img2ppt.renderers.pptx_renderer import PPTXRenderer

__all__ = ["PPTXRenderer"]
