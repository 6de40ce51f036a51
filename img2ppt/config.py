"""
Layout configuration.

Every tunable of the reconstruction engine lives in one frozen record that is
passed explicitly into each call, so a layout is a pure function of its
elements, its canvas and this config.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# 1 inch = 72 points
POINTS_PER_INCH = 72.0

# Detector regions are normalized to this scale
REGION_SCALE = 1000.0


class LayoutConfig(BaseModel):
    """Tunable constants for layout reconstruction."""

    model_config = ConfigDict(frozen=True)

    # Canvas
    canvas_width: float = Field(default=10.0, gt=0, description="Slide width in inches")

    # Container inflation
    padding_fraction: float = Field(default=0.05, ge=0, description="Padding per side, fraction of box size")
    min_padding_x: float = Field(default=0.05, gt=0, description="Minimum horizontal padding in inches")
    min_padding_y: float = Field(default=0.02, gt=0, description="Minimum vertical padding in inches")

    # Raw text inflation (avoids glyph clipping)
    text_inflation: float = Field(default=1.05, gt=1.0)

    # Font sizing
    container_fill_ratio: float = Field(default=0.70, gt=0, le=1.0)
    text_fill_ratio: float = Field(default=0.85, gt=0, le=1.0)
    bold_factor: float = Field(default=0.95, gt=0, le=1.0)
    min_font_size: float = Field(default=9.0, gt=0, description="Minimum readable size in points")

    # Container styling
    corner_radius: float = Field(default=0.1, ge=0, description="Rounded corner radius in inches")
    container_margin: float = Field(default=2.0, ge=0, description="Inner text margin in points")
    text_margin: float = Field(default=0.0, ge=0)
    default_container_color: str = "FFFFFF"
    border_color: str = "888888"
    border_width: float = 0.5
    border_transparency: float = Field(default=50.0, ge=0, le=100)
    shadow_color: str = "000000"
    shadow_opacity: float = Field(default=0.3, ge=0, le=1.0)
    shadow_blur: float = 3.0
    shadow_offset: float = 2.0
    shadow_angle: float = 45.0
    outline_width: float = 0.75

    # Color policy
    snap_colors: bool = Field(default=False, description="Snap near-white/near-black colors")
    snap_high: int = 240
    snap_low: int = 15

    # Region policy
    strict_regions: bool = Field(
        default=False,
        description="Drop elements with degenerate regions instead of clamping them",
    )
    min_region_size: float = Field(default=1.0, gt=0, description="Clamp size on the 0-1000 scale")

    @model_validator(mode="after")
    def check_inflation_order(self) -> "LayoutConfig":
        # Containers must always grow more than raw text
        if self.padding_fraction * 2 <= self.text_inflation - 1:
            raise ValueError(
                f"padding_fraction ({self.padding_fraction}) must be greater than half of "
                f"text_inflation - 1 ({(self.text_inflation - 1) / 2:g})"
            )
        return self
