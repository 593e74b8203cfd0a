"""Element and region models."""

from printzone.dsl.schema import (
    CURVE_LIMIT,
    BaseElement,
    Delimitation,
    DelimitationScale,
    DesignElement,
    ElementType,
    ImageElement,
    PixelRect,
    TextElement,
    Viewport,
)

__all__ = [
    "CURVE_LIMIT",
    "BaseElement",
    "Delimitation",
    "DelimitationScale",
    "DesignElement",
    "ElementType",
    "ImageElement",
    "PixelRect",
    "TextElement",
    "Viewport",
]
