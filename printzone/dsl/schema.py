"""Pydantic v2 models for design elements and printable regions.

Element positions are stored as the element center expressed as a fraction
(0-1) of the current viewport size. Widths and heights are stored in the
reference space the delimitation was authored in and are scaled to viewport
pixels at use time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Constants
CURVE_LIMIT = 355


class ElementType(str, Enum):
    """Supported overlay element types."""

    TEXT = "text"
    IMAGE = "image"


# ============================================================================
# Region Models
# ============================================================================


class Delimitation(BaseModel):
    """Printable region authored in a fixed reference pixel space."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left edge in reference pixels")
    y: float = Field(description="Top edge in reference pixels")
    width: float = Field(ge=0, description="Region width in reference pixels")
    height: float = Field(ge=0, description="Region height in reference pixels")
    reference_width: float = Field(ge=0, description="Width of the authoring space")
    reference_height: float = Field(ge=0, description="Height of the authoring space")

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height


class Viewport(BaseModel):
    """Current rendering surface size in pixels."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0, description="Surface width in pixels")
    height: float = Field(ge=0, description="Surface height in pixels")

    @property
    def is_empty(self) -> bool:
        """True when either dimension is zero."""
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class PixelRect:
    """Axis-aligned rectangle in viewport pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def contains(self, point: tuple[float, float]) -> bool:
        """Inclusive containment test."""
        px, py = point
        return self.x <= px <= self.right and self.y <= py <= self.bottom


@dataclass(frozen=True)
class DelimitationScale:
    """Per-axis scale factors and the delimitation mapped into viewport pixels."""

    scale_x: float
    scale_y: float
    bounds: PixelRect


# ============================================================================
# Element Models
# ============================================================================


class BaseElement(BaseModel):
    """Fields shared by every overlay element."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique element identifier")
    x: float = Field(description="Center X as a fraction of viewport width")
    y: float = Field(description="Center Y as a fraction of viewport height")
    width: float = Field(gt=0, description="Width in reference units")
    height: float = Field(gt=0, description="Height in reference units")
    rotation: float = Field(default=0.0, description="Rotation in degrees (unbounded)")
    z_index: int = Field(default=0, description="Stacking order (higher = on top)")

    @property
    def aspect_ratio(self) -> float:
        """Width over height."""
        return self.width / self.height


class TextElement(BaseElement):
    """A text layer, optionally bent along a quadratic curve."""

    type: Literal["text"] = "text"
    text: str = Field(default="", description="Text content")
    font_size: float = Field(default=24, gt=0, description="Font size in reference pixels")
    base_font_size: float = Field(
        default=24,
        gt=0,
        description="Font size recorded at the last manual font-size edit",
    )
    base_width: float = Field(
        default=150,
        gt=0,
        description="Width recorded at the last manual font-size edit",
    )
    font_family: str = Field(default="Arial, sans-serif")
    color: str = Field(default="#000000", description="Text color")
    font_weight: Literal["normal", "bold"] = "normal"
    font_style: Literal["normal", "italic"] = "normal"
    text_decoration: Literal["none", "underline"] = "none"
    text_align: Literal["left", "center", "right"] = "center"
    curve: int = Field(
        default=0,
        ge=-CURVE_LIMIT,
        le=CURVE_LIMIT,
        description="Curvature (0 = straight, negative bends up, positive bends down)",
    )


class ImageElement(BaseElement):
    """An image layer."""

    type: Literal["image"] = "image"
    image_url: str = Field(description="Image source URL")
    natural_width: float = Field(gt=0, description="Intrinsic image width")
    natural_height: float = Field(gt=0, description="Intrinsic image height")
    design_id: Optional[str] = Field(default=None, description="Vendor design identifier")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Commerce metadata")


DesignElement = Annotated[
    Union[TextElement, ImageElement],
    Field(discriminator="type"),
]
