"""
Container geometry and styling.

``has_container`` selects one of two policies:

- container present: pad the box, fill it, add a border and drop shadow,
  render as a rounded rectangle;
- container absent: grow the box slightly so glyphs don't clip, no fill.
"""

from typing import Optional

from img2ppt.config import LayoutConfig
from img2ppt.layout.colors import resolve_color
from img2ppt.layout.fonts import estimate_font_size, font_face_for
from img2ppt.layout.geometry import inflate_box, scale_box
from img2ppt.models import (
    TextElement,
    Box,
    Fill,
    Border,
    Shadow,
    Outline,
    TextStyle,
    PlainTextBox,
    ContainerBox,
    TextObject,
)


def inflate_container(box: Box, config: LayoutConfig) -> Box:
    """Pad a container box by a fraction of its size, floored by a minimum."""
    pad_x = max(config.min_padding_x, box.w * config.padding_fraction)
    pad_y = max(config.min_padding_y, box.h * config.padding_fraction)
    return inflate_box(box, pad_x, pad_y)


def inflate_text(box: Box, config: LayoutConfig) -> Box:
    return scale_box(box, config.text_inflation)


def container_fill(element: TextElement, config: LayoutConfig) -> Fill:
    """
    Resolve the container fill.

    Missing color means white. Missing opacity means solid; otherwise
    transparency = (1 - opacity) * 100.
    """
    if element.container_color is None:
        color = config.default_container_color
    else:
        color = _color(element.container_color, config)

    if element.container_opacity is None:
        transparency = 0.0
    else:
        opacity = min(1.0, max(0.0, element.container_opacity))
        transparency = (1.0 - opacity) * 100.0

    return Fill(color=color, transparency=transparency)


def text_outline(element: TextElement, config: LayoutConfig) -> Optional[Outline]:
    if not element.stroke_color:
        return None
    return Outline(color=_color(element.stroke_color, config), width=config.outline_width)


def style_element(
    element: TextElement,
    box: Box,
    config: Optional[LayoutConfig] = None,
) -> TextObject:
    """
    Turn a projected element box into a styled slide object.

    Args:
        element: Detected text element
        box: Raw projected box in canvas units
        config: Layout configuration

    Returns:
        ContainerBox if the element has a container, else PlainTextBox
    """
    config = config or LayoutConfig()

    if element.has_container:
        final_box = inflate_container(box, config)
        margin = config.container_margin
    else:
        final_box = inflate_text(box, config)
        margin = config.text_margin

    # Size against the final box
    style = TextStyle(
        text=element.text,
        font_size=estimate_font_size(element, final_box.h, config),
        font_face=font_face_for(element.font_family),
        color=_color(element.text_color, config),
        bold=element.is_bold,
        italic=element.is_italic,
        alignment=element.alignment,
        vertical_anchor="middle",
        margin=margin,
        outline=text_outline(element, config),
    )

    if not element.has_container:
        return PlainTextBox(box=final_box, style=style)

    return ContainerBox(
        box=final_box,
        style=style,
        fill=container_fill(element, config),
        border=Border(
            color=config.border_color,
            width=config.border_width,
            transparency=config.border_transparency,
        ),
        shadow=Shadow(
            color=config.shadow_color,
            opacity=config.shadow_opacity,
            blur=config.shadow_blur,
            offset=config.shadow_offset,
            angle=config.shadow_angle,
        ),
        corner_radius=config.corner_radius,
    )


def _color(value: Optional[str], config: LayoutConfig) -> str:
    return resolve_color(
        value, snap=config.snap_colors, high=config.snap_high, low=config.snap_low
    )
