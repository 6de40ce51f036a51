"""
Color resolution.

Detector colors are cosmetic: a bad value must never abort placement, so
anything unparseable resolves to black.
"""

import re
from typing import Optional, Tuple

from img2ppt.errors import MalformedColor

FALLBACK_COLOR = "000000"

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(value: Optional[str]) -> str:
    """
    Parse a 3- or 6-digit hex color, with or without a leading '#'.

    Returns:
        Six uppercase hex digits

    Raises:
        MalformedColor: If the value is not a hex color
    """
    if not isinstance(value, str):
        raise MalformedColor(f"Not a color string: {value!r}")

    clean = value.strip()
    if clean.startswith("#"):
        clean = clean[1:]
    if not _HEX_RE.match(clean):
        raise MalformedColor(f"Not a hex color: {value!r}")

    # Shorthand "FFF" -> "FFFFFF"
    if len(clean) == 3:
        clean = "".join(c * 2 for c in clean)

    return clean.upper()


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Split a normalized 6-digit hex color into channels."""
    return int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)


def snap_color(hex_color: str, high: int = 240, low: int = 15) -> str:
    """
    Snap near-white to FFFFFF and near-black to 000000.

    Vision models often report slightly off whites and blacks due to lighting
    and compression.
    """
    r, g, b = hex_to_rgb(hex_color)
    if r > high and g > high and b > high:
        return "FFFFFF"
    if r < low and g < low and b < low:
        return "000000"
    return hex_color


def resolve_color(
    value: Optional[str], snap: bool = False, high: int = 240, low: int = 15
) -> str:
    """Normalize a detector color, falling back to black when unparseable."""
    try:
        color = parse_hex_color(value)
    except MalformedColor:
        return FALLBACK_COLOR

    if snap:
        color = snap_color(color, high=high, low=low)
    return color
