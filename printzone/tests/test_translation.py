"""Tests for the translation constraint."""

import math

import pytest

from printzone.constraints.bounds import corners_inside
from printzone.constraints.mapping import scale_delimitation
from printzone.constraints.translation import TranslationConstraint, clamp_position
from printzone.constraints.tuning import ConstraintTuning
from printzone.dsl.schema import Delimitation, ImageElement, Viewport


def _legal(element: ImageElement, x: float, y: float, viewport: Viewport, region: Delimitation) -> bool:
    mapped = scale_delimitation(viewport, region)
    center = (x * viewport.width, y * viewport.height)
    return corners_inside(
        mapped.bounds,
        center,
        element.width * mapped.scale_x / 2,
        element.height * mapped.scale_y / 2,
        element.rotation,
    )


class TestAxisAlignedDrag:
    """Unrotated elements clamp each axis independently."""

    def test_drag_past_right_edge(self, square, viewport, region) -> None:
        """Moving to 0.99 stops with the right edge on the region edge."""
        x, y = clamp_position(square, 0.99, 0.5, viewport, region)
        assert x == pytest.approx(0.9)
        assert y == pytest.approx(0.5)
        assert x * 200 + 20 <= 200 + 1e-9

    def test_drag_inside_is_unchanged(self, square, viewport, region) -> None:
        """A legal proposal is returned as-is."""
        assert clamp_position(square, 0.6, 0.4, viewport, region) == pytest.approx((0.6, 0.4))

    def test_both_axes_clamped(self, square, viewport, region) -> None:
        """Corner drags clamp each axis to its own limit."""
        x, y = clamp_position(square, -0.5, 1.5, viewport, region)
        assert x == pytest.approx(0.1)
        assert y == pytest.approx(0.9)

    def test_scaled_viewport(self, square, region) -> None:
        """Half extents scale with the viewport."""
        x, _ = clamp_position(square, 0.99, 0.5, Viewport(width=400, height=400), region)
        # 40 reference units -> 80px, region spans 0-400px
        assert x == pytest.approx(360 / 400)

    def test_idempotent(self, square, viewport, region) -> None:
        """Requesting the current position returns it."""
        assert clamp_position(square, square.x, square.y, viewport, region) == pytest.approx(
            (square.x, square.y)
        )


class TestRotatedDrag:
    """Rotated elements search along the displacement line."""

    @pytest.fixture
    def diamond(self, square: ImageElement) -> ImageElement:
        return square.model_copy(update={"rotation": 45})

    def test_legal_proposal_accepted(self, diamond, viewport, region) -> None:
        """A proposal keeping every corner inside is not altered."""
        assert clamp_position(diamond, 0.6, 0.5, viewport, region) == (0.6, 0.5)

    def test_bisection_stops_short_of_edge(self, diamond, viewport, region) -> None:
        """The result lies just inside the reachable limit along the drag."""
        x, y = clamp_position(diamond, 0.99, 0.5, viewport, region)

        # Reachable limit is 200 - 20*sqrt(2); 0.99 of that displacement is kept
        limit_ratio = (200 - 20 * math.sqrt(2) - 100) / 98
        expected = (100 + 98 * limit_ratio * 0.99) / 200
        assert x == pytest.approx(expected, abs=1e-3)
        assert y == pytest.approx(0.5)
        assert _legal(diamond, x, y, viewport, region)

    def test_diagonal_drag_stays_on_line(self, diamond, viewport, region) -> None:
        """The clamped center stays on the segment from origin to proposal."""
        x, y = clamp_position(diamond, 1.2, 0.9, viewport, region)
        ratio_x = (x - 0.5) / 0.7
        ratio_y = (y - 0.5) / 0.4
        assert ratio_x == pytest.approx(ratio_y, abs=1e-6)
        assert 0 < ratio_x < 1
        assert _legal(diamond, x, y, viewport, region)

    def test_tiny_displacement_is_noop(self, square, viewport, region) -> None:
        """Displacements under 0.1px return the current center."""
        element = square.model_copy(update={"rotation": 45, "x": 0.8585})
        assert clamp_position(element, 0.8589, 0.5, viewport, region) == (0.8585, 0.5)

    def test_custom_safety_margin(self, diamond, viewport, region) -> None:
        """The safety factor is taken from the tuning."""
        strict = TranslationConstraint(ConstraintTuning(translation_safety=0.5))
        x, _ = strict.clamp(diamond, 0.99, 0.5, viewport, region)
        limit_ratio = (200 - 20 * math.sqrt(2) - 100) / 98
        assert x == pytest.approx((100 + 98 * limit_ratio * 0.5) / 200, abs=1e-3)


class TestTranslationProperties:
    """Containment and monotonic safety over a spread of requests."""

    @pytest.mark.parametrize("rotation", [0, 15, 30, 60, 135])
    @pytest.mark.parametrize(
        "target",
        [(0.0, 0.0), (1.0, 0.5), (0.5, 1.3), (-0.4, 0.7), (0.95, 0.05), (0.7, 0.65)],
    )
    def test_result_contained_and_not_overshooting(
        self, square, viewport, region, rotation, target
    ) -> None:
        element = square.model_copy(update={"rotation": rotation})
        x, y = clamp_position(element, target[0], target[1], viewport, region)

        assert _legal(element, x, y, viewport, region)
        requested = math.hypot(target[0] - 0.5, target[1] - 0.5)
        moved = math.hypot(x - 0.5, y - 0.5)
        assert moved <= requested + 1e-9

    def test_identity_without_region(self, square, viewport) -> None:
        """No delimitation means no constraint."""
        assert clamp_position(square, 3.0, -2.0, viewport, None) == (3.0, -2.0)

    def test_identity_with_empty_viewport(self, square, region) -> None:
        """A zero-sized viewport cannot be mapped; the proposal passes through."""
        assert clamp_position(square, 0.99, 0.5, Viewport(width=0, height=0), region) == (0.99, 0.5)
