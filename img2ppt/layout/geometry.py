"""
Canvas sizing and coordinate projection.

Detector regions live on a 0-1000 scale in both axes. They are projected onto
a canvas whose aspect ratio matches the source image, so nothing is stretched.
"""

from typing import Optional

from img2ppt.config import LayoutConfig, REGION_SCALE
from img2ppt.errors import InvalidDimensions, DegenerateRegion
from img2ppt.models import Region, CanvasSpec, Box


def compute_canvas(
    source_width_px: float,
    source_height_px: float,
    config: Optional[LayoutConfig] = None,
) -> CanvasSpec:
    """
    Size the canvas for a source image.

    Width is fixed by the config; height follows the source aspect ratio.

    Args:
        source_width_px: Source image width in pixels
        source_height_px: Source image height in pixels
        config: Layout configuration (default: LayoutConfig())

    Returns:
        CanvasSpec in inches

    Raises:
        InvalidDimensions: If either dimension is <= 0
    """
    config = config or LayoutConfig()
    if source_width_px <= 0 or source_height_px <= 0:
        raise InvalidDimensions(source_width_px, source_height_px)

    aspect_ratio = source_width_px / source_height_px
    width = config.canvas_width
    return CanvasSpec(width=width, height=width / aspect_ratio)


def project_region(region: Region, canvas: CanvasSpec) -> Box:
    """Map a 0-1000 region onto the canvas. Degenerate input propagates as-is."""
    return Box(
        x=region.left / REGION_SCALE * canvas.width,
        y=region.top / REGION_SCALE * canvas.height,
        w=(region.right - region.left) / REGION_SCALE * canvas.width,
        h=(region.bottom - region.top) / REGION_SCALE * canvas.height,
    )


def check_region(region: Region, config: Optional[LayoutConfig] = None) -> Region:
    """
    Apply the degenerate-region policy.

    Valid regions are returned unchanged. Degenerate ones are clamped to a
    minimum extent, or rejected when ``config.strict_regions`` is set.

    Raises:
        DegenerateRegion: If the region is degenerate and strict mode is on
    """
    config = config or LayoutConfig()
    if not region.is_degenerate:
        return region

    if config.strict_regions:
        raise DegenerateRegion(
            f"Region {region.to_box_2d()} has non-positive size "
            f"({region.width}x{region.height})"
        )

    size = config.min_region_size
    return Region(
        top=region.top,
        left=region.left,
        bottom=max(region.bottom, region.top + size),
        right=max(region.right, region.left + size),
    )


def inflate_box(box: Box, pad_x: float, pad_y: float) -> Box:
    """Grow a box by a pad on every side."""
    return Box(x=box.x - pad_x, y=box.y - pad_y, w=box.w + pad_x * 2, h=box.h + pad_y * 2)


def scale_box(box: Box, factor: float) -> Box:
    """Scale width and height, keeping the top-left corner fixed."""
    return Box(x=box.x, y=box.y, w=box.w * factor, h=box.h * factor)
