"""Tests for the gesture state machine."""

import pytest

from printzone.editor.gestures import (
    Dragging,
    GestureController,
    Idle,
    Resizing,
    Rotating,
    propose_drag,
    propose_resize,
    propose_rotation,
)


@pytest.fixture
def controller() -> GestureController:
    """Create a gesture controller with a default engine."""
    return GestureController()


class TestStateTransitions:
    """Tests for entering and leaving gestures."""

    def test_starts_idle(self, controller) -> None:
        assert isinstance(controller.state, Idle)
        assert not controller.is_active
        assert controller.target_id is None

    def test_begin_and_end(self, controller, square, viewport) -> None:
        state = controller.begin_rotate(square, (150, 100), viewport)
        assert isinstance(state, Rotating)
        assert state.pivot == (100, 100)
        assert controller.is_active
        assert controller.target_id == "square"

        previous = controller.end()
        assert previous is state
        assert isinstance(controller.state, Idle)

    def test_one_gesture_at_a_time(self, controller, square) -> None:
        controller.begin_drag(square, (100, 100))
        with pytest.raises(RuntimeError):
            controller.begin_resize(square, (120, 120))

    def test_end_when_idle(self, controller) -> None:
        assert isinstance(controller.end(), Idle)

    def test_resize_locks_aspect_at_start(self, controller, text) -> None:
        state = controller.begin_resize(text, (175, 120))
        assert isinstance(state, Resizing)
        assert state.aspect_ratio == pytest.approx(150 / 40)

    def test_move_when_idle_is_noop(self, controller, square, viewport, region) -> None:
        outcome = controller.move(square, (10, 10), viewport, region)
        assert outcome.element is square
        assert not outcome.at_boundary

    def test_move_rejects_other_element(self, controller, square, text, viewport, region) -> None:
        controller.begin_drag(square, (100, 100))
        with pytest.raises(ValueError):
            controller.move(text, (110, 100), viewport, region)


class TestProposals:
    """Tests for raw pointer-to-geometry proposals."""

    def test_drag_delta_in_fractions(self, viewport) -> None:
        state = Dragging(element_id="e", pointer_origin=(100, 100), element_origin=(0.5, 0.5))
        assert propose_drag(state, (150, 80), viewport) == pytest.approx((0.75, 0.4))

    def test_resize_uniform_from_larger_change(self) -> None:
        state = Resizing(
            element_id="e", pointer_origin=(120, 120), start_width=40, start_height=40, aspect_ratio=1.0
        )
        assert propose_resize(state, (140, 125), (1.0, 1.0), 10) == pytest.approx((60, 60))

    def test_resize_delta_in_reference_units(self) -> None:
        """Pointer pixels are divided by the responsive scale."""
        state = Resizing(
            element_id="e", pointer_origin=(0, 0), start_width=40, start_height=20, aspect_ratio=2.0
        )
        assert propose_resize(state, (40, 0), (2.0, 2.0), 10) == pytest.approx((60, 30))

    def test_resize_floor(self) -> None:
        state = Resizing(
            element_id="e", pointer_origin=(120, 120), start_width=40, start_height=40, aspect_ratio=1.0
        )
        assert propose_resize(state, (0, 0), (1.0, 1.0), 10) == pytest.approx((10, 10))

    def test_rotation_follows_pointer_angle(self) -> None:
        state = Rotating(element_id="e", pointer_origin=(200, 100), start_angle=0, pivot=(100, 100))
        assert propose_rotation(state, (100, 200)) == pytest.approx(90)
        assert propose_rotation(state, (100, 0)) == pytest.approx(270)

    def test_rotation_relative_to_start(self) -> None:
        state = Rotating(element_id="e", pointer_origin=(200, 100), start_angle=30, pivot=(100, 100))
        assert propose_rotation(state, (0, 100)) == pytest.approx(210)


class TestConstrainedGestures:
    """Pointer moves are resolved through the constraint engine."""

    def test_drag_clamped(self, controller, square, viewport, region) -> None:
        controller.begin_drag(square, (100, 100))
        outcome = controller.move(square, (190, 100), viewport, region)
        assert outcome.element.x == pytest.approx(0.9)
        assert outcome.element.y == pytest.approx(0.5)

    def test_drag_from_snapshot(self, controller, square, viewport, region) -> None:
        """Each move is measured from the pointer-down position."""
        controller.begin_drag(square, (100, 100))
        first = controller.move(square, (120, 100), viewport, region).element
        second = controller.move(first, (130, 100), viewport, region).element
        assert second.x == pytest.approx(0.65)

    def test_resize_reports_boundary(self, controller, square, viewport, region) -> None:
        controller.begin_resize(square, (120, 120))
        outcome = controller.move(square, (420, 420), viewport, region)
        assert outcome.element.width == pytest.approx(200)
        assert outcome.element.height == pytest.approx(200)
        assert outcome.at_boundary

    def test_resize_scales_text_font(self, controller, text, viewport, region) -> None:
        controller.begin_resize(text, (175, 120))
        outcome = controller.move(text, (100, 100), viewport, region)
        assert outcome.element.width == pytest.approx(75)
        assert outcome.element.font_size == pytest.approx(12)
        assert not outcome.at_boundary

    def test_rotate(self, controller, square, viewport, region) -> None:
        controller.begin_rotate(square, (200, 100), viewport)
        outcome = controller.move(square, (100, 200), viewport, region)
        assert outcome.element.rotation == pytest.approx(90)
