"""
Layout reconstruction engine.

Turns detected text elements into a deterministic slide layout: canvas
sizing, coordinate projection, color normalization, font sizing and
container styling. Pure functions, no I/O.
"""

from img2ppt.layout.colors import resolve_color, parse_hex_color
from img2ppt.layout.engine import assemble_layout, build_slide, reconstruct
from img2ppt.layout.fonts import estimate_font_size, font_face_for
from img2ppt.layout.geometry import compute_canvas, project_region, check_region
from img2ppt.layout.styling import style_element

__all__ = [
    "assemble_layout",
    "build_slide",
    "check_region",
    "compute_canvas",
    "estimate_font_size",
    "font_face_for",
    "parse_hex_color",
    "project_region",
    "reconstruct",
    "resolve_color",
    "style_element",
]
