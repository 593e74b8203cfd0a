"""Gesture state machine turning pointer movement into constrained transforms.

A single element can be the target of one gesture at a time:

    Idle -> Dragging | Resizing | Rotating -> Idle

Each active state carries the snapshot taken on pointer-down, so every pointer
move computes its proposal from that snapshot rather than from the previous
frame. Proposals are handed to the ConstraintEngine, which returns a complete
legal element; nothing needs rolling back when the gesture ends.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from printzone.constraints.engine import ConstraintEngine
from printzone.constraints.mapping import center_to_pixels, resolve_scale
from printzone.constraints.resize import lock_aspect
from printzone.dsl.schema import BaseElement, Delimitation, DesignElement, Viewport

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""

    kind: str = "idle"


@dataclass(frozen=True)
class Dragging:
    """Element is being moved."""

    element_id: str
    pointer_origin: Point
    element_origin: Point  # Center as viewport fractions
    kind: str = "dragging"


@dataclass(frozen=True)
class Resizing:
    """Element is being resized from its corner handle."""

    element_id: str
    pointer_origin: Point
    start_width: float
    start_height: float
    aspect_ratio: float
    kind: str = "resizing"


@dataclass(frozen=True)
class Rotating:
    """Element is being rotated about its center."""

    element_id: str
    pointer_origin: Point
    start_angle: float
    pivot: Point  # Element center in viewport pixels
    kind: str = "rotating"


GestureState = Union[Idle, Dragging, Resizing, Rotating]


@dataclass(frozen=True)
class GestureOutcome:
    """Element produced by one pointer move."""

    element: DesignElement
    at_boundary: bool = False


class GestureController:
    """Owns the gesture state for one editing surface."""

    def __init__(self, engine: Optional[ConstraintEngine] = None) -> None:
        self.engine = engine or ConstraintEngine()
        self.state: GestureState = Idle()

    @property
    def is_active(self) -> bool:
        """True while a gesture is in progress."""
        return not isinstance(self.state, Idle)

    @property
    def target_id(self) -> Optional[str]:
        """Id of the element under the active gesture."""
        return getattr(self.state, "element_id", None)

    def _require_idle(self) -> None:
        if self.is_active:
            raise RuntimeError(
                f"Gesture already in progress ({self.state.kind} on {self.target_id})"
            )

    def begin_drag(self, element: BaseElement, pointer: Point) -> Dragging:
        """Start moving an element."""
        self._require_idle()
        self.state = Dragging(
            element_id=element.id,
            pointer_origin=pointer,
            element_origin=(element.x, element.y),
        )
        return self.state

    def begin_resize(self, element: BaseElement, pointer: Point) -> Resizing:
        """Start resizing an element. The aspect ratio is locked for the whole gesture."""
        self._require_idle()
        self.state = Resizing(
            element_id=element.id,
            pointer_origin=pointer,
            start_width=element.width,
            start_height=element.height,
            aspect_ratio=element.width / element.height,
        )
        return self.state

    def begin_rotate(self, element: BaseElement, pointer: Point, viewport: Viewport) -> Rotating:
        """Start rotating an element about its center."""
        self._require_idle()
        self.state = Rotating(
            element_id=element.id,
            pointer_origin=pointer,
            start_angle=element.rotation,
            pivot=center_to_pixels(element, viewport),
        )
        return self.state

    def end(self) -> GestureState:
        """Finish the current gesture and return the state that was active."""
        previous = self.state
        self.state = Idle()
        if not isinstance(previous, Idle):
            logger.debug(f"Gesture {previous.kind} on {previous.element_id} ended")
        return previous

    def move(
        self,
        element: DesignElement,
        pointer: Point,
        viewport: Viewport,
        delimitation: Optional[Delimitation],
    ) -> GestureOutcome:
        """Apply one pointer move to the gesture target.

        Args:
            element: Current state of the targeted element.
            pointer: Pointer position in viewport pixels.
            viewport: Current rendering surface.
            delimitation: Printable region.

        Returns:
            GestureOutcome with the constrained element.
        """
        state = self.state
        if isinstance(state, Idle):
            return GestureOutcome(element)
        if element.id != state.element_id:
            raise ValueError(f"Element {element.id} is not the gesture target")

        if isinstance(state, Dragging):
            x, y = propose_drag(state, pointer, viewport)
            return GestureOutcome(self.engine.move(element, x, y, viewport, delimitation))

        if isinstance(state, Resizing):
            scale = resolve_scale(viewport, delimitation)
            factors = (scale.scale_x, scale.scale_y) if scale else (1.0, 1.0)
            width, height = propose_resize(state, pointer, factors, self.engine.tuning.min_element_size)
            resized, at_boundary = self.engine.resize(
                element, width, height, viewport, delimitation, state.aspect_ratio
            )
            return GestureOutcome(resized, at_boundary)

        angle = propose_rotation(state, pointer)
        return GestureOutcome(self.engine.rotate(element, angle, viewport, delimitation))


def propose_drag(state: Dragging, pointer: Point, viewport: Viewport) -> Point:
    """Raw center proposal: origin plus the pointer delta as viewport fractions."""
    dx = (pointer[0] - state.pointer_origin[0]) / viewport.width
    dy = (pointer[1] - state.pointer_origin[1]) / viewport.height
    return state.element_origin[0] + dx, state.element_origin[1] + dy


def propose_resize(
    state: Resizing,
    pointer: Point,
    scale_factors: tuple[float, float],
    min_size: float,
) -> tuple[float, float]:
    """Raw size proposal from the corner-handle delta.

    The larger relative change on either axis drives a uniform scale, then the
    result is forced back onto the locked aspect ratio.
    """
    dx = (pointer[0] - state.pointer_origin[0]) / scale_factors[0]
    dy = (pointer[1] - state.pointer_origin[1]) / scale_factors[1]

    width = max(min_size, state.start_width + dx)
    height = max(min_size, state.start_height + dy)

    factor = max(width / state.start_width, height / state.start_height)
    width = max(min_size, state.start_width * factor)
    height = max(min_size, state.start_height * factor)

    return lock_aspect(width, height, state.aspect_ratio)


def propose_rotation(state: Rotating, pointer: Point) -> float:
    """Raw rotation proposal from the pointer's angle around the pivot."""
    px, py = state.pivot
    angle = math.atan2(pointer[1] - py, pointer[0] - px)
    start = math.atan2(state.pointer_origin[1] - py, state.pointer_origin[0] - px)
    return (state.start_angle + math.degrees(angle - start)) % 360
