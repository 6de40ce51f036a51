"""
Font size estimation and font face mapping.

Sizes are derived from the bounding box alone. The detector's relative size
hint is not used: box height is the most reliable physical signal available.
"""

from typing import Optional

from img2ppt.config import LayoutConfig, POINTS_PER_INCH
from img2ppt.models import TextElement

# Detector font family -> PowerPoint-compatible face
FONT_FACES = {
    "serif": "Times New Roman",
    "sans-serif": "Arial",
    "monospace": "Courier New",
    "handwriting": "Segoe Print",
}

DEFAULT_FONT_FACE = "Arial"


def font_face_for(family: Optional[str]) -> str:
    return FONT_FACES.get(family or "", DEFAULT_FONT_FACE)


def estimate_font_size(
    element: TextElement,
    box_height: float,
    config: Optional[LayoutConfig] = None,
) -> float:
    """
    Estimate a font size in points that fills the box.

    Args:
        element: The text element being sized
        box_height: Final box height in canvas units (inches)
        config: Layout configuration

    Returns:
        Font size in points, never below ``config.min_font_size``
    """
    config = config or LayoutConfig()

    box_height_pt = box_height * POINTS_PER_INCH
    height_per_line = box_height_pt / element.line_count

    # Containers usually carry extra whitespace; raw text is a tight fit
    if element.has_container:
        fill_ratio = config.container_fill_ratio
    else:
        fill_ratio = config.text_fill_ratio

    size = height_per_line * fill_ratio

    # Bold glyphs are wider; shrink to reduce wrapping
    if element.is_bold:
        size *= config.bold_factor

    return max(config.min_font_size, size)
