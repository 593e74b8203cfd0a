"""
tuning.py - Named constants for the bounded-transform constraints.

Every safety margin, floor, iteration ceiling and sampling density used by the
constraint modules lives here. Never inline these values elsewhere.

Safety margins are fractional shrinks applied to a bisection result so that a
point converged onto the region edge does not fail the inclusive containment
test through floating-point or sampling error.
"""

from dataclasses import dataclass

# =============================================================================
# SAFETY MARGINS
# =============================================================================

TRANSLATION_SAFETY = 0.99  # Fraction of the legal displacement kept
ROTATION_SAFETY = 0.98     # Fraction of the legal rotation delta kept
CURVE_SAFETY = 0.90        # Fraction of the legal curvature magnitude kept

# =============================================================================
# SIZE FLOOR
# =============================================================================

# Single floor for both gesture proposals and the boundary clamp (reference units)
MIN_ELEMENT_SIZE = 10.0

# =============================================================================
# TRANSLATION SEARCH
# =============================================================================

AXIS_ALIGNED_TOLERANCE_DEG = 0.5
TRANSLATION_MAX_ITERATIONS = 25
TRANSLATION_RATIO_EPSILON = 1e-4
MIN_DISPLACEMENT_PX = 0.1

# =============================================================================
# ROTATION SEARCH
# =============================================================================

ROTATION_MAX_ITERATIONS = 25
ROTATION_EPSILON_DEG = 1.0

# =============================================================================
# CURVE SEARCH
# =============================================================================

CURVE_MAX_ITERATIONS = 20
CURVE_EPSILON = 0.5
CURVE_SAMPLE_STEP = 0.05          # 21 samples along the path
CURVE_TEXT_MARGIN_RATIO = 0.6     # Glyph ascent/descent around the path, in font sizes
CURVE_PROBE_OFFSETS = (0.0, -1.0, 1.0)  # In text margins


@dataclass(frozen=True)
class ConstraintTuning:
    """Tunable parameters shared by the constraint modules."""

    translation_safety: float = TRANSLATION_SAFETY
    rotation_safety: float = ROTATION_SAFETY
    curve_safety: float = CURVE_SAFETY
    min_element_size: float = MIN_ELEMENT_SIZE
    axis_aligned_tolerance: float = AXIS_ALIGNED_TOLERANCE_DEG
    translation_max_iterations: int = TRANSLATION_MAX_ITERATIONS
    translation_epsilon: float = TRANSLATION_RATIO_EPSILON
    min_displacement_px: float = MIN_DISPLACEMENT_PX
    rotation_max_iterations: int = ROTATION_MAX_ITERATIONS
    rotation_epsilon: float = ROTATION_EPSILON_DEG
    curve_max_iterations: int = CURVE_MAX_ITERATIONS
    curve_epsilon: float = CURVE_EPSILON
    curve_sample_step: float = CURVE_SAMPLE_STEP
    curve_text_margin_ratio: float = CURVE_TEXT_MARGIN_RATIO
    curve_probe_offsets: tuple[float, ...] = CURVE_PROBE_OFFSETS

    @property
    def curve_sample_count(self) -> int:
        """Number of parametric samples taken along a curve, endpoints included."""
        return int(round(1.0 / self.curve_sample_step)) + 1


DEFAULT_TUNING = ConstraintTuning()
