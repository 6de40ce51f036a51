"""
Object assembly.

Builds the ordered slide object list for one image: background first, then
one text object per element in input order. Paint order equals input order,
so later elements draw over earlier ones.
"""

from typing import List, Optional, Sequence

from img2ppt.config import LayoutConfig
from img2ppt.errors import DegenerateRegion
from img2ppt.layout.geometry import compute_canvas, project_region, check_region
from img2ppt.layout.styling import style_element
from img2ppt.models import (
    TextElement,
    CanvasSpec,
    Box,
    BackgroundObject,
    SlideObject,
    SlideLayout,
)


def build_slide(
    elements: Sequence[TextElement],
    canvas: CanvasSpec,
    background_ref: str,
    config: Optional[LayoutConfig] = None,
) -> List[SlideObject]:
    """
    Assemble the slide objects for one image.

    Args:
        elements: Detected text elements, in paint order
        canvas: Target canvas
        background_ref: Image reference for the full-canvas background
        config: Layout configuration

    Returns:
        [BackgroundObject, text objects...]; background-only if no elements
    """
    config = config or LayoutConfig()

    objects: List[SlideObject] = [
        BackgroundObject(
            image_ref=background_ref,
            box=Box(x=0.0, y=0.0, w=canvas.width, h=canvas.height),
        )
    ]

    for i, element in enumerate(elements):
        try:
            region = check_region(element.region, config)
        except DegenerateRegion as e:
            print(f"[Layout] Warning: Dropping element {i} ({element.text[:30]!r}): {e}")
            continue

        if region is not element.region:
            print(
                f"[Layout] Warning: Clamped degenerate region {element.region.to_box_2d()} "
                f"for element {i}"
            )

        box = project_region(region, canvas)
        objects.append(style_element(element, box, config))

    return objects


def assemble_layout(
    elements: Sequence[TextElement],
    canvas: CanvasSpec,
    background_ref: str,
    config: Optional[LayoutConfig] = None,
    index: int = 0,
    source: Optional[str] = None,
) -> SlideLayout:
    """Build a SlideLayout for one image on an already sized canvas."""
    objects = build_slide(elements, canvas, background_ref, config)
    return SlideLayout(index=index, source=source, canvas=canvas, objects=objects)


def reconstruct(
    elements: Sequence[TextElement],
    width_px: float,
    height_px: float,
    background_ref: str,
    config: Optional[LayoutConfig] = None,
    index: int = 0,
    source: Optional[str] = None,
) -> SlideLayout:
    """
    Reconstruct a full slide layout from one image's detections.

    The canvas is sized from this image alone. Batches that share one slide
    size call ``assemble_layout`` with the shared canvas instead.

    Raises:
        InvalidDimensions: If the image dimensions are not positive
    """
    config = config or LayoutConfig()
    canvas = compute_canvas(width_px, height_px, config)
    return assemble_layout(elements, canvas, background_ref, config, index=index, source=source)
