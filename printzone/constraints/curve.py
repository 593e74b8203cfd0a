"""Curve constraint for text bent along a quadratic Bezier path.

The text baseline runs from (0, h/2) to (w, h/2) in element-local pixels with
a single control point at (w/2, h/2 + curve * h / 100). Glyphs extend a text
margin above and below the path, so each sampled path point is probed at the
path itself and one margin either side. Probes are rotated with the element
about its center before the containment test.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from printzone.constraints.bounds import Point, all_inside, rotate_point
from printzone.constraints.mapping import center_to_pixels, resolve_scale
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning
from printzone.dsl.schema import (
    CURVE_LIMIT,
    Delimitation,
    DelimitationScale,
    TextElement,
    Viewport,
)

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(magnitude if value >= 0 else -magnitude)


def quad_bezier(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve at parameter t."""
    u = 1.0 - t
    x = u * u * p0[0] + 2 * u * t * p1[0] + t * t * p2[0]
    y = u * u * p0[1] + 2 * u * t * p1[1] + t * t * p2[1]
    return x, y


def curve_path_points(width: float, height: float, curve: float, samples: int) -> list[Point]:
    """Sample the text path in element-local pixels (origin at the top-left)."""
    p0 = (0.0, height / 2)
    p1 = (width / 2, height / 2 + curve * height / 100)
    p2 = (width, height / 2)
    last = max(samples - 1, 1)
    return [quad_bezier(p0, p1, p2, i / last) for i in range(samples)]


def curve_envelope(
    element: TextElement,
    curve: float,
    viewport: Viewport,
    scale: DelimitationScale,
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> list[Point]:
    """Probe points of curved text in viewport pixels.

    Args:
        element: Text element supplying size, font size, rotation and center.
        curve: Curvature to evaluate (may differ from element.curve).
        viewport: Current rendering surface.
        scale: Mapped delimitation (supplies the responsive scale factors).
        tuning: Sampling density and margin parameters.

    Returns:
        All probe points for the given curvature.
    """
    width = element.width * scale.scale_x
    height = element.height * scale.scale_y
    text_margin = element.font_size * scale.scale_y * tuning.curve_text_margin_ratio

    center_x, center_y = center_to_pixels(element, viewport)
    radians = math.radians(element.rotation)

    probes = []
    for px, py in curve_path_points(width, height, curve, tuning.curve_sample_count):
        local_x = px - width / 2
        for offset in tuning.curve_probe_offsets:
            local_y = py + offset * text_margin - height / 2
            rx, ry = rotate_point(local_x, local_y, radians)
            probes.append((center_x + rx, center_y + ry))
    return probes


@dataclass
class CurveConstraint:
    """Finds the largest curvature magnitude that keeps curved text inside."""

    tuning: ConstraintTuning = field(default_factory=lambda: DEFAULT_TUNING)

    def clamp(
        self,
        element: TextElement,
        requested_curve: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> int:
        """Legal curvature with the sign of the request.

        Args:
            element: Text element being curved.
            requested_curve: Requested curvature, clipped to +/-355.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            Integer curvature.
        """
        requested = max(-CURVE_LIMIT, min(CURVE_LIMIT, requested_curve))
        if requested == 0:
            return 0

        scale = resolve_scale(viewport, delimitation)
        if scale is None:
            return round_half_away(requested)

        def is_legal(curve: float) -> bool:
            return all_inside(
                scale.bounds,
                curve_envelope(element, curve, viewport, scale, self.tuning),
            )

        if is_legal(requested):
            return round_half_away(requested)

        sign = 1 if requested > 0 else -1
        min_curve = 0.0
        max_curve = abs(requested)

        for _ in range(self.tuning.curve_max_iterations):
            if max_curve - min_curve < self.tuning.curve_epsilon:
                break
            mid = (min_curve + max_curve) / 2
            if is_legal(sign * mid):
                min_curve = mid
            else:
                max_curve = mid

        result = round_half_away(sign * min_curve * self.tuning.curve_safety)
        logger.debug(f"Curve of {element.id} limited to {result} (requested {requested_curve})")
        return result


def clamp_curve(
    element: TextElement,
    requested_curve: float,
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> int:
    """Convenience function to clamp a requested curvature.

    Args:
        element: Text element being curved.
        requested_curve: Requested curvature.
        viewport: Current rendering surface.
        delimitation: Printable region.
        tuning: Constraint parameters.

    Returns:
        Legal integer curvature.
    """
    return CurveConstraint(tuning).clamp(element, requested_curve, viewport, delimitation)
