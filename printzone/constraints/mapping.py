"""Mapping between reference space, viewport pixels and fractional positions."""

from typing import Optional

from printzone.dsl.schema import (
    BaseElement,
    Delimitation,
    DelimitationScale,
    PixelRect,
    Viewport,
)


def scale_delimitation(viewport: Viewport, delimitation: Delimitation) -> DelimitationScale:
    """Map a reference-space delimitation into viewport pixels.

    Scale factors are independent per axis: viewport size over reference size.
    A zero reference dimension is a caller error and raises ZeroDivisionError.

    Args:
        viewport: Current rendering surface.
        delimitation: Region in its authoring space.

    Returns:
        DelimitationScale with both factors and the pixel bounds.
    """
    scale_x = viewport.width / delimitation.reference_width
    scale_y = viewport.height / delimitation.reference_height

    bounds = PixelRect(
        x=delimitation.x * scale_x,
        y=delimitation.y * scale_y,
        width=delimitation.width * scale_x,
        height=delimitation.height * scale_y,
    )
    return DelimitationScale(scale_x=scale_x, scale_y=scale_y, bounds=bounds)


def resolve_scale(
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
) -> Optional[DelimitationScale]:
    """Map the delimitation, or return None when the inputs cannot be mapped.

    Constraints treat None as "no region": they hand back their input unchanged.
    """
    if viewport is None or delimitation is None:
        return None
    if viewport.is_empty:
        return None
    if delimitation.reference_width <= 0 or delimitation.reference_height <= 0:
        return None
    return scale_delimitation(viewport, delimitation)


def center_to_pixels(element: BaseElement, viewport: Viewport) -> tuple[float, float]:
    """Element center in viewport pixels."""
    return element.x * viewport.width, element.y * viewport.height


def pixels_to_fraction(point: tuple[float, float], viewport: Viewport) -> tuple[float, float]:
    """Viewport pixels back to fractional coordinates."""
    return point[0] / viewport.width, point[1] / viewport.height


def responsive_half_extents(
    width: float,
    height: float,
    scale: DelimitationScale,
) -> tuple[float, float]:
    """Half width and half height of a reference-space box in viewport pixels."""
    return width * scale.scale_x / 2, height * scale.scale_y / 2


def region_center_fraction(viewport: Viewport, scale: DelimitationScale) -> tuple[float, float]:
    """Center of the mapped region as viewport fractions."""
    return pixels_to_fraction(scale.bounds.center, viewport)
