"""Constraint engine applying bounded transforms to design elements."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from printzone.constraints.bounds import outside_edges, rotated_corners
from printzone.constraints.curve import CurveConstraint, curve_envelope
from printzone.constraints.mapping import center_to_pixels, resolve_scale, responsive_half_extents
from printzone.constraints.resize import ResizeConstraint
from printzone.constraints.rotation import RotationConstraint
from printzone.constraints.translation import TranslationConstraint
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning
from printzone.dsl.schema import (
    BaseElement,
    Delimitation,
    DesignElement,
    TextElement,
    Viewport,
)

logger = logging.getLogger(__name__)


@dataclass
class Violation:
    """Represents a containment violation."""

    rule: str
    message: str
    severity: str  # "error", "warning", "info"
    element_id: str
    edges: list[str] = field(default_factory=list)


@dataclass
class ConstraintResult:
    """Result of containment validation."""

    is_valid: bool
    violations: list[Violation]


class ConstraintEngine:
    """Applies translation, resize, rotation and curvature requests to elements.

    Every geometry change is followed by a curvature pass (`settle_curve`):
    curvature depends on position, size and rotation, never the reverse, so a
    previously legal curve is re-clamped against the new geometry.
    """

    def __init__(self, tuning: ConstraintTuning = DEFAULT_TUNING) -> None:
        """Initialize the engine.

        Args:
            tuning: Safety margins, floors and search parameters.
        """
        self.tuning = tuning
        self.translation = TranslationConstraint(tuning)
        self.resizing = ResizeConstraint(tuning)
        self.rotation = RotationConstraint(tuning)
        self.curvature = CurveConstraint(tuning)

    def move(
        self,
        element: DesignElement,
        x: float,
        y: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> DesignElement:
        """Move an element toward a proposed center.

        Args:
            element: Element to move.
            x: Requested center X (viewport fraction).
            y: Requested center Y (viewport fraction).
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            Updated element.
        """
        new_x, new_y = self.translation.clamp(element, x, y, viewport, delimitation)
        moved = element.model_copy(update={"x": new_x, "y": new_y})
        return self.settle_curve(moved, viewport, delimitation)

    def resize(
        self,
        element: DesignElement,
        width: float,
        height: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
        aspect_ratio: Optional[float] = None,
    ) -> tuple[DesignElement, bool]:
        """Resize an element about its center.

        Text elements scale their font proportionally to the width recorded at
        the last manual font-size edit.

        Args:
            element: Element to resize.
            width: Requested width (reference units).
            height: Requested height (reference units).
            viewport: Current rendering surface.
            delimitation: Printable region.
            aspect_ratio: Width/height ratio to hold.

        Returns:
            Tuple of (updated element, boundary reached).
        """
        result = self.resizing.clamp(element, width, height, viewport, delimitation, aspect_ratio)
        update: dict = {"width": result.width, "height": result.height}

        if isinstance(element, TextElement):
            update["font_size"] = element.base_font_size * result.width / element.base_width

        resized = element.model_copy(update=update)
        return self.settle_curve(resized, viewport, delimitation), result.at_boundary

    def rotate(
        self,
        element: DesignElement,
        rotation: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> DesignElement:
        """Rotate an element toward a requested angle.

        Args:
            element: Element to rotate.
            rotation: Requested rotation in degrees.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            Updated element.
        """
        angle = self.rotation.clamp(element, rotation, viewport, delimitation)
        rotated = element.model_copy(update={"rotation": angle})
        return self.settle_curve(rotated, viewport, delimitation)

    def set_curve(
        self,
        element: DesignElement,
        curve: float,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> DesignElement:
        """Bend a text element. Images are returned unchanged."""
        if not isinstance(element, TextElement):
            return element
        legal = self.curvature.clamp(element, curve, viewport, delimitation)
        return element.model_copy(update={"curve": legal})

    def settle_curve(
        self,
        element: DesignElement,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> DesignElement:
        """Re-clamp an existing curvature against the element's current geometry."""
        if not isinstance(element, TextElement) or element.curve == 0:
            return element

        legal = self.curvature.clamp(element, element.curve, viewport, delimitation)
        if legal != element.curve:
            logger.debug(f"Curve of {element.id} re-clamped from {element.curve} to {legal}")
            return element.model_copy(update={"curve": legal})
        return element

    def validate(
        self,
        element: DesignElement,
        viewport: Optional[Viewport],
        delimitation: Optional[Delimitation],
    ) -> ConstraintResult:
        """Check an element's footprint against the region.

        Args:
            element: Element to check.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            ConstraintResult listing the crossed edges.
        """
        scale = resolve_scale(viewport, delimitation)
        if scale is None:
            return ConstraintResult(is_valid=True, violations=[])

        violations: list[Violation] = []

        # Check rotated corners
        half_width, half_height = responsive_half_extents(element.width, element.height, scale)
        corners = rotated_corners(
            center_to_pixels(element, viewport), half_width, half_height, element.rotation
        )
        edges = outside_edges(scale.bounds, corners)
        if edges:
            violations.append(
                Violation(
                    rule="bounds",
                    message=f"Element {element.id} extends beyond the {', '.join(edges)} edge",
                    severity="error",
                    element_id=element.id,
                    edges=edges,
                )
            )

        # Check curved text envelope
        if isinstance(element, TextElement) and element.curve != 0:
            envelope = curve_envelope(element, element.curve, viewport, scale, self.tuning)
            edges = outside_edges(scale.bounds, envelope)
            if edges:
                violations.append(
                    Violation(
                        rule="curve_bounds",
                        message=f"Curved text {element.id} extends beyond the {', '.join(edges)} edge",
                        severity="error",
                        element_id=element.id,
                        edges=edges,
                    )
                )

        return ConstraintResult(
            is_valid=len([v for v in violations if v.severity == "error"]) == 0,
            violations=violations,
        )


def is_contained(
    element: BaseElement,
    viewport: Optional[Viewport],
    delimitation: Optional[Delimitation],
    tuning: ConstraintTuning = DEFAULT_TUNING,
) -> bool:
    """Convenience check that an element sits entirely inside the region."""
    return ConstraintEngine(tuning).validate(element, viewport, delimitation).is_valid
