"""
Error taxonomy for img2ppt.

Image-level faults abort only that image; element-level faults are
recovered or isolated to the element.
"""


class Img2PPTError(Exception):
    """Base class for all img2ppt errors."""


class InvalidDimensions(Img2PPTError, ValueError):
    """Source image width or height is zero or negative."""

    def __init__(self, width_px: float, height_px: float):
        self.width_px = width_px
        self.height_px = height_px
        super().__init__(
            f"Invalid source dimensions: {width_px}x{height_px} (both must be > 0)"
        )


class MalformedColor(Img2PPTError, ValueError):
    """Color string could not be parsed as 3- or 6-digit hex."""


class DegenerateRegion(Img2PPTError, ValueError):
    """Region has non-positive width or height."""


class DetectionError(Img2PPTError, RuntimeError):
    """The detection service failed to analyze an image."""


class BackgroundCleaningError(DetectionError):
    """The generation service failed to produce a text-free background."""
