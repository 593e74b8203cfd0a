"""Rotation constraint: largest legal rotation toward a requested angle."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from printzone.constraints.bounds import corners_inside
from printzone.constraints.mapping import center_to_pixels, resolve_scale, responsive_half_extents
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning
from printzone.dsl.schema import BaseElement, Delimitation, Viewport

logger = logging.getLogger(__name__)


def normalize_angle(degrees: float) -> float:
    """Map an angle into [0, 360)."""
    return degrees % 360.0


def shortest_delta(from_degrees: float, to_degrees: float) -> float:
    """Signed shortest rotation from one angle to another, in (-180, 180]."""
    diff = normalize_angle(to_degrees) - normalize_angle(from_degrees)
    if diff > 180.0:
        diff -= 360.0
    elif diff <= -180.0:
        diff += 360.0
    return diff


@dataclass
class RotationConstraint:
    """Finds the largest rotation toward a target that keeps all corners inside."""

    tuning: ConstraintTuning = field(default_factory=lambda: DEFAULT_TUNING)

    def clamp(
        self,
        element: BaseElement,
        target_rotation: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> float:
        """Legal rotation toward the target.

        Args:
            element: Element being rotated (its current rotation is assumed legal).
            target_rotation: Requested rotation in degrees.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            Rotation in degrees. The target is returned untouched when legal;
            otherwise the result is expressed relative to the current rotation
            and is not normalized.
        """
        scale = resolve_scale(viewport, delimitation)
        if scale is None:
            return target_rotation

        bounds = scale.bounds
        center = center_to_pixels(element, viewport)
        half_width, half_height = responsive_half_extents(element.width, element.height, scale)

        def is_legal(angle: float) -> bool:
            return corners_inside(bounds, center, half_width, half_height, angle)

        if is_legal(target_rotation):
            return target_rotation

        start = element.rotation
        best = start
        diff = shortest_delta(start, target_rotation)

        for _ in range(self.tuning.rotation_max_iterations):
            if abs(diff) < self.tuning.rotation_epsilon:
                break
            candidate = best + diff / 2
            if is_legal(candidate):
                best = candidate
                diff = shortest_delta(best, target_rotation)
            else:
                diff /= 2

        result = start + (best - start) * self.tuning.rotation_safety
        logger.debug(
            f"Rotation of {element.id} limited to {result:.2f} deg "
            f"(requested {target_rotation:.2f})"
        )
        return result


def clamp_rotation(
    element: BaseElement,
    target_rotation: float,
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> float:
    """Convenience function to clamp a requested rotation.

    Args:
        element: Element being rotated.
        target_rotation: Requested rotation in degrees.
        viewport: Current rendering surface.
        delimitation: Printable region.
        tuning: Constraint parameters.

    Returns:
        Legal rotation in degrees.
    """
    return RotationConstraint(tuning).clamp(element, target_rotation, viewport, delimitation)
