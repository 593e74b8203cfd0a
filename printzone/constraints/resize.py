"""Resize constraint: center-anchored, aspect-locked growth within the region."""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from printzone.constraints.mapping import center_to_pixels, resolve_scale
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning
from printzone.dsl.schema import BaseElement, Delimitation, Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResizeResult:
    """Result of a resize clamp."""

    width: float
    height: float
    at_boundary: bool  # Advisory only: the request exceeded the available space


def lock_aspect(width: float, height: float, aspect_ratio: Optional[float]) -> tuple[float, float]:
    """Force a size onto an aspect ratio.

    Landscape ratios derive the height from the width, portrait ratios the
    width from the height.
    """
    if not aspect_ratio or aspect_ratio <= 0:
        return width, height
    if aspect_ratio > 1:
        return width, width / aspect_ratio
    return height * aspect_ratio, height


@dataclass
class ResizeConstraint:
    """Clamps a proposed size to the space around the element's fixed center."""

    tuning: ConstraintTuning = field(default_factory=lambda: DEFAULT_TUNING)

    def clamp(
        self,
        element: BaseElement,
        proposed_width: float,
        proposed_height: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
        aspect_ratio: Optional[float] = None,
    ) -> ResizeResult:
        """Largest legal size toward the proposed one.

        Growth is symmetric about the element center, so each axis may use at
        most twice the distance to the nearer of its two region edges. The
        budgets are compared with the axis-aligned footprint of the rotated
        box. When either is exceeded both dimensions shrink by the same factor.
        The minimum size floor is applied last and wins over containment.

        Args:
            element: Element being resized.
            proposed_width: Requested width in reference units.
            proposed_height: Requested height in reference units.
            viewport: Current rendering surface.
            delimitation: Printable region.
            aspect_ratio: Width/height ratio to hold; None keeps the request's own ratio.

        Returns:
            ResizeResult in reference units.
        """
        scale = resolve_scale(viewport, delimitation)
        if scale is None:
            return ResizeResult(proposed_width, proposed_height, False)

        width, height = lock_aspect(proposed_width, proposed_height, aspect_ratio)

        bounds = scale.bounds
        center_x, center_y = center_to_pixels(element, viewport)
        space_left = center_x - bounds.x
        space_right = bounds.right - center_x
        space_top = center_y - bounds.y
        space_bottom = bounds.bottom - center_y

        max_width_px = 2 * min(space_left, space_right)
        max_height_px = 2 * min(space_top, space_bottom)

        width_px = width * scale.scale_x
        height_px = height * scale.scale_y

        # Footprint of the rotated box; it scales linearly with a uniform factor
        radians = math.radians(element.rotation)
        cos_r = abs(math.cos(radians))
        sin_r = abs(math.sin(radians))
        extent_x = width_px * cos_r + height_px * sin_r
        extent_y = width_px * sin_r + height_px * cos_r

        at_boundary = extent_x > max_width_px or extent_y > max_height_px
        if at_boundary:
            factor = min(
                max_width_px / extent_x if extent_x > 0 else 1.0,
                max_height_px / extent_y if extent_y > 0 else 1.0,
            )
            factor = max(factor, 0.0)
            width_px *= factor
            height_px *= factor
            logger.debug(
                f"Resize of {element.id} limited by factor {factor:.3f} "
                f"(budget {max_width_px:.1f}x{max_height_px:.1f}px)"
            )

        floor = self.tuning.min_element_size
        return ResizeResult(
            width=max(floor, width_px / scale.scale_x),
            height=max(floor, height_px / scale.scale_y),
            at_boundary=at_boundary,
        )


def clamp_size(
    element: BaseElement,
    proposed_width: float,
    proposed_height: float,
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
    aspect_ratio: Optional[float] = None,
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> ResizeResult:
    """Convenience function to clamp a proposed size.

    Args:
        element: Element being resized.
        proposed_width: Requested width (reference units).
        proposed_height: Requested height (reference units).
        viewport: Current rendering surface.
        delimitation: Printable region.
        aspect_ratio: Width/height ratio to hold.
        tuning: Constraint parameters.

    Returns:
        ResizeResult with the legal size and the boundary flag.
    """
    return ResizeConstraint(tuning).clamp(
        element, proposed_width, proposed_height, viewport, delimitation, aspect_ratio
    )
