"""Translation constraint: keep a dragged element inside the region."""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from printzone.constraints.bounds import corners_inside
from printzone.constraints.mapping import (
    center_to_pixels,
    pixels_to_fraction,
    resolve_scale,
    responsive_half_extents,
)
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning
from printzone.dsl.schema import BaseElement, Delimitation, PixelRect, Viewport

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class TranslationConstraint:
    """Clamps a proposed element center so the element stays in the region."""

    tuning: ConstraintTuning = field(default_factory=lambda: DEFAULT_TUNING)

    def clamp(
        self,
        element: BaseElement,
        proposed_x: float,
        proposed_y: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> tuple[float, float]:
        """Closest legal center toward the proposed one.

        Args:
            element: Element being dragged (its center is assumed legal).
            proposed_x: Requested center X as a viewport fraction.
            proposed_y: Requested center Y as a viewport fraction.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            Tuple of (x, y) as viewport fractions.
        """
        scale = resolve_scale(viewport, delimitation)
        if scale is None:
            return proposed_x, proposed_y

        bounds = scale.bounds
        half_width, half_height = responsive_half_extents(element.width, element.height, scale)
        target = (proposed_x * viewport.width, proposed_y * viewport.height)

        if abs(element.rotation) < self.tuning.axis_aligned_tolerance:
            # Unrotated containment is two independent interval clamps
            clamped = (
                _clamp(target[0], bounds.x + half_width, bounds.right - half_width),
                _clamp(target[1], bounds.y + half_height, bounds.bottom - half_height),
            )
            return pixels_to_fraction(clamped, viewport)

        if corners_inside(bounds, target, half_width, half_height, element.rotation):
            return proposed_x, proposed_y

        origin = center_to_pixels(element, viewport)
        dx = target[0] - origin[0]
        dy = target[1] - origin[1]
        if math.hypot(dx, dy) < self.tuning.min_displacement_px:
            return element.x, element.y

        ratio = self._bisect(element, origin, dx, dy, half_width, half_height, bounds)
        ratio *= self.tuning.translation_safety
        result = (origin[0] + dx * ratio, origin[1] + dy * ratio)

        logger.debug(
            f"Translation of {element.id} clamped at ratio {ratio:.4f} "
            f"({result[0]:.1f}, {result[1]:.1f})px"
        )
        return pixels_to_fraction(result, viewport)

    def _bisect(
        self,
        element: BaseElement,
        origin: tuple[float, float],
        dx: float,
        dy: float,
        half_width: float,
        half_height: float,
        bounds: PixelRect,
    ) -> float:
        """Largest legal fraction of the displacement, searched by bisection."""
        min_ratio = 0.0
        max_ratio = 1.0

        for _ in range(self.tuning.translation_max_iterations):
            if max_ratio - min_ratio < self.tuning.translation_epsilon:
                break
            mid = (min_ratio + max_ratio) / 2
            candidate = (origin[0] + dx * mid, origin[1] + dy * mid)
            if corners_inside(bounds, candidate, half_width, half_height, element.rotation):
                min_ratio = mid
            else:
                max_ratio = mid

        return min_ratio


def clamp_position(
    element: BaseElement,
    proposed_x: float,
    proposed_y: float,
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> tuple[float, float]:
    """Convenience function to clamp a proposed center.

    Args:
        element: Element being moved.
        proposed_x: Requested center X (viewport fraction).
        proposed_y: Requested center Y (viewport fraction).
        viewport: Current rendering surface.
        delimitation: Printable region.
        tuning: Constraint parameters.

    Returns:
        Legal (x, y) as viewport fractions.
    """
    return TranslationConstraint(tuning).clamp(
        element, proposed_x, proposed_y, viewport, delimitation
    )
