"""
Core data models for img2ppt.

Defines the detector input records, the canvas, and the closed set of slide
objects produced by the layout engine, using Pydantic for validation.
"""

from pathlib import Path
from typing import Annotated, List, Optional, Literal, Dict, Any, Union

from PIL import Image
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)


class Region(BaseModel):
    """Text region on the normalized 0-1000 scale, top-left origin."""

    model_config = ConfigDict(frozen=True)

    top: float
    left: float
    bottom: float
    right: float

    @classmethod
    def from_box_2d(cls, box: List[float]) -> "Region":
        """Build from the detector's [ymin, xmin, ymax, xmax] array."""
        if len(box) != 4:
            raise ValueError(f"box_2d needs 4 values, got {len(box)}")
        top, left, bottom, right = box
        return cls(top=top, left=left, bottom=bottom, right=right)

    def to_box_2d(self) -> List[float]:
        return [self.top, self.left, self.bottom, self.right]

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


FontFamily = Literal["serif", "sans-serif", "monospace", "handwriting"]
Alignment = Literal["left", "center", "right"]


class TextElement(BaseModel):
    """
    One detected text region with its style attributes.

    Accepts the detector's camelCase wire names (``box_2d``, ``textColor``,
    ``hasContainer``...) as well as the snake_case field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., min_length=1)
    region: Region = Field(..., alias="box_2d")
    text_color: Optional[str] = Field("000000", alias="textColor")
    has_container: bool = Field(False, alias="hasContainer")
    container_color: Optional[str] = Field(None, alias="containerColor")
    container_opacity: Optional[float] = Field(None, alias="containerOpacity")
    stroke_color: Optional[str] = Field(None, alias="strokeColor")
    font_size_hint: Optional[float] = Field(
        None, alias="fontSize", description="Relative size estimate (informational)"
    )
    font_family: FontFamily = Field("sans-serif", alias="fontFamily")
    font_weight: Literal["bold", "normal"] = Field("normal", alias="fontWeight")
    font_style: Literal["italic", "normal"] = Field("normal", alias="fontStyle")
    alignment: Alignment = "left"
    is_title: bool = Field(False, alias="isTitle")

    @field_validator("region", mode="before")
    @classmethod
    def parse_region(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return Region.from_box_2d(list(v))
        return v

    @field_serializer("region")
    def serialize_region(self, region: Region) -> List[float]:
        return region.to_box_2d()

    @field_validator("text_color", "container_color", "stroke_color", mode="before")
    @classmethod
    def coerce_color(cls, v: Any) -> Any:
        # Colors are cosmetic; anything odd is left for the layout to resolve to black
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("container_opacity", mode="before")
    @classmethod
    def coerce_opacity(cls, v: Any) -> Any:
        if v is None or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("font_family", "font_weight", "font_style", "alignment", mode="before")
    @classmethod
    def normalize_enums(cls, v: Any, info: ValidationInfo) -> Any:
        # Detectors send null for "not sure"; treat it as the default
        if v is None:
            return cls.model_fields[info.field_name].default
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    @property
    def is_bold(self) -> bool:
        return self.font_weight == "bold"

    @property
    def is_italic(self) -> bool:
        return self.font_style == "italic"


class CanvasSpec(BaseModel):
    """Output drawing surface for one slide, in inches."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0)
    height: float = Field(gt=0)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Box(BaseModel):
    """Absolute geometry in canvas units (inches)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h


# --- Style records ---


class Outline(BaseModel):
    """Glyph outline."""

    model_config = ConfigDict(frozen=True)

    color: str
    width: float = Field(gt=0, description="Width in points")


class Fill(BaseModel):
    """Solid container fill. Transparency is 0-100, 0 = fully opaque."""

    model_config = ConfigDict(frozen=True)

    color: str
    transparency: float = Field(default=0.0, ge=0, le=100)


class Border(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: str
    width: float = Field(gt=0, description="Width in points")
    transparency: float = Field(default=0.0, ge=0, le=100)


class Shadow(BaseModel):
    """Outer drop shadow."""

    model_config = ConfigDict(frozen=True)

    color: str
    opacity: float = Field(ge=0, le=1.0)
    blur: float = Field(ge=0, description="Blur radius in points")
    offset: float = Field(ge=0, description="Distance in points")
    angle: float = Field(default=45.0, description="Direction in degrees")


class TextStyle(BaseModel):
    """Resolved text styling for a text object."""

    model_config = ConfigDict(frozen=True)

    text: str
    font_size: float = Field(gt=0, description="Size in points")
    font_face: str
    color: str
    bold: bool = False
    italic: bool = False
    alignment: Alignment = "left"
    vertical_anchor: Literal["top", "middle", "bottom"] = "middle"
    margin: float = Field(default=0.0, ge=0, description="Inner margin in points")
    outline: Optional[Outline] = None


# --- Slide objects (output of the layout engine) ---


class BackgroundObject(BaseModel):
    """Full-canvas background image."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["background"] = "background"
    image_ref: str
    box: Box


class PlainTextBox(BaseModel):
    """Text without a container shape."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    box: Box
    style: TextStyle


class ContainerBox(BaseModel):
    """Text inside a filled rounded rectangle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["container"] = "container"
    box: Box
    style: TextStyle
    fill: Fill
    border: Border
    shadow: Shadow
    corner_radius: float = Field(ge=0, description="Radius in inches")


SlideObject = Annotated[
    Union[BackgroundObject, PlainTextBox, ContainerBox], Field(discriminator="kind")
]
TextObject = Union[PlainTextBox, ContainerBox]


class SlideLayout(BaseModel):
    """The reconstructed layout of one source image."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    source: Optional[str] = None
    canvas: CanvasSpec
    objects: List[SlideObject] = Field(default_factory=list)

    @property
    def background(self) -> BackgroundObject:
        return self.objects[0]

    @property
    def text_objects(self) -> List[TextObject]:
        return [obj for obj in self.objects if obj.kind != "background"]

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for JSON serialization."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideLayout":
        """Load from dict."""
        return cls.model_validate(data)


# --- Pipeline records ---


class SourceImage(BaseModel):
    """A source slide image loaded into memory."""

    model_config = ConfigDict(frozen=True)

    path: Path
    data: bytes = Field(repr=False)
    mime_type: str = "image/png"
    width_px: int
    height_px: int

    @classmethod
    def from_path(cls, path: Path) -> "SourceImage":
        """Read image bytes and pixel dimensions."""
        path = Path(path)
        data = path.read_bytes()
        with Image.open(path) as img:
            width, height = img.size
            mime_type = Image.MIME.get(img.format or "", "image/png")
        return cls(path=path, data=data, mime_type=mime_type, width_px=width, height_px=height)

    @property
    def aspect_ratio(self) -> float:
        return self.width_px / self.height_px

    @property
    def target_aspect_ratio(self) -> Literal["16:9", "4:3", "1:1"]:
        """
        Nearest generator aspect ratio, thresholds at the midpoints.

        16:9 covers 16:9 (1.77) and 16:10 (1.6); 4:3 covers 4:3 (1.33) and 3:2 (1.5).
        """
        ratio = self.aspect_ratio
        if ratio >= 1.55:
            return "16:9"
        if ratio >= 1.15:
            return "4:3"
        return "1:1"


class ImageJob(BaseModel):
    """Per-image state of a batch conversion."""

    index: int = Field(ge=0)
    source: Path
    status: Literal["pending", "processing", "completed", "error"] = "pending"
    width_px: int = 0
    height_px: int = 0
    elements: List[TextElement] = Field(default_factory=list)
    background_ref: Optional[str] = None
    background_fallback: bool = False
    error: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"
