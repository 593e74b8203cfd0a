"""Editing layer: gesture state machine and element session."""

from printzone.editor.gestures import (
    Dragging,
    GestureController,
    GestureOutcome,
    GestureState,
    Idle,
    Resizing,
    Rotating,
    propose_drag,
    propose_resize,
    propose_rotation,
)
from printzone.editor.session import DesignSession, generate_id, migrate_element

__all__ = [
    "DesignSession",
    "generate_id",
    "migrate_element",
    "GestureController",
    "GestureOutcome",
    "GestureState",
    "Idle",
    "Dragging",
    "Resizing",
    "Rotating",
    "propose_drag",
    "propose_resize",
    "propose_rotation",
]
