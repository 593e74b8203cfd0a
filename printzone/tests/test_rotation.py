"""Tests for the rotation constraint."""

import pytest

from printzone.constraints.bounds import corners_inside
from printzone.constraints.mapping import scale_delimitation
from printzone.constraints.rotation import (
    RotationConstraint,
    clamp_rotation,
    normalize_angle,
    shortest_delta,
)
from printzone.constraints.tuning import ConstraintTuning
from printzone.dsl.schema import Delimitation, ImageElement, Viewport


@pytest.fixture
def bar(square: ImageElement) -> ImageElement:
    """180x20 bar centered in the viewport."""
    return square.model_copy(update={"width": 180, "height": 20})


def _legal(element: ImageElement, rotation: float, viewport: Viewport, region: Delimitation) -> bool:
    mapped = scale_delimitation(viewport, region)
    return corners_inside(
        mapped.bounds,
        (element.x * viewport.width, element.y * viewport.height),
        element.width / 2,
        element.height / 2,
        rotation,
    )


class TestAngleHelpers:
    """Tests for angle normalization."""

    def test_normalize(self) -> None:
        assert normalize_angle(-90) == 270
        assert normalize_angle(725) == 5

    def test_shortest_delta(self) -> None:
        assert shortest_delta(350, 10) == pytest.approx(20)
        assert shortest_delta(10, 350) == pytest.approx(-20)
        assert shortest_delta(0, 180) == pytest.approx(180)
        assert shortest_delta(180, 0) == pytest.approx(180)


class TestRotationConstraint:
    """Tests for bisection toward the requested angle."""

    def test_legal_target_returned_exactly(self, square, viewport, region) -> None:
        """A small element in a large region rotates freely."""
        assert clamp_rotation(square, 45, viewport, region) == 45

    def test_blocked_rotation_stops_early(self, bar, viewport, band_region) -> None:
        """A long bar in a short band can only tilt slightly."""
        result = clamp_rotation(bar, 90, viewport, band_region)
        assert 0 < result < 10
        assert _legal(bar, result, viewport, band_region)

    def test_negative_direction(self, bar, viewport, band_region) -> None:
        """Requests behind the current angle rotate the other way."""
        result = clamp_rotation(bar, -90, viewport, band_region)
        assert -10 < result < 0
        assert _legal(bar, result, viewport, band_region)

    def test_takes_shortest_path(self, bar, viewport, band_region) -> None:
        """From 355 toward 90 the shortest path runs upward through 360."""
        element = bar.model_copy(update={"rotation": 355})
        result = clamp_rotation(element, 90, viewport, band_region)
        assert result > 355
        assert _legal(element, result, viewport, band_region)

    def test_never_overshoots(self, bar, viewport, band_region) -> None:
        """The applied change never exceeds the requested one."""
        for target in (20, 45, 135, -30, 270):
            result = clamp_rotation(bar, target, viewport, band_region)
            assert abs(result - bar.rotation) <= abs(shortest_delta(bar.rotation, target)) + 1e-9

    def test_safety_margin_from_tuning(self, bar, viewport, band_region) -> None:
        """A smaller safety factor keeps proportionally less of the legal delta."""
        loose = clamp_rotation(bar, 90, viewport, band_region)
        strict = RotationConstraint(ConstraintTuning(rotation_safety=0.49)).clamp(
            bar, 90, viewport, band_region
        )
        assert strict == pytest.approx(loose * 0.49 / 0.98)

    def test_idempotent(self, bar, viewport, band_region) -> None:
        """Requesting the current legal angle returns it."""
        element = bar.model_copy(update={"rotation": 3})
        assert clamp_rotation(element, 3, viewport, band_region) == 3

    def test_identity_without_region(self, bar, viewport) -> None:
        assert clamp_rotation(bar, 123.4, viewport, None) == 123.4
