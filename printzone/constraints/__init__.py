"""Bounded-transform constraints - keep element geometry inside the printable region."""

from printzone.constraints.bounds import all_inside, corners_inside, rotated_corners
from printzone.constraints.curve import CurveConstraint, clamp_curve, curve_envelope
from printzone.constraints.engine import ConstraintEngine, ConstraintResult, Violation, is_contained
from printzone.constraints.mapping import resolve_scale, scale_delimitation
from printzone.constraints.resize import ResizeConstraint, ResizeResult, clamp_size, lock_aspect
from printzone.constraints.rotation import RotationConstraint, clamp_rotation, shortest_delta
from printzone.constraints.translation import TranslationConstraint, clamp_position
from printzone.constraints.tuning import DEFAULT_TUNING, ConstraintTuning

__all__ = [
    # Engine
    "ConstraintEngine",
    "ConstraintResult",
    "Violation",
    "is_contained",
    # Mapping & bounds
    "scale_delimitation",
    "resolve_scale",
    "all_inside",
    "corners_inside",
    "rotated_corners",
    # Translation
    "TranslationConstraint",
    "clamp_position",
    # Resize
    "ResizeConstraint",
    "ResizeResult",
    "clamp_size",
    "lock_aspect",
    # Rotation
    "RotationConstraint",
    "clamp_rotation",
    "shortest_delta",
    # Curve
    "CurveConstraint",
    "clamp_curve",
    "curve_envelope",
    # Tuning
    "ConstraintTuning",
    "DEFAULT_TUNING",
]
