"""
Easing

Cubic Bezier easing curves for keyframe segments.
"""

from typing import Optional, Tuple

from ..config.settings import (
    BEZIER_NEWTON_ITERATIONS,
    BEZIER_BISECTION_ITERATIONS,
    BEZIER_EPSILON,
    BEZIER_MIN_SLOPE,
)


class CubicBezierEasing:
    """
    Unit cubic Bezier curve from (0, 0) to (1, 1).

    The two inner control points are the easing handles. Evaluating the
    curve maps a linear progress x to an eased progress y by solving
    B_x(s) = x for the curve parameter s and returning B_y(s).
    """

    def __init__(self, p1: Tuple[float, float], p2: Tuple[float, float]):
        """
        Initialize easing curve.

        Args:
            p1: First control point (out handle of the leading keyframe)
            p2: Second control point (in handle of the trailing keyframe)
        """
        self.p1 = (float(p1[0]), float(p1[1]))
        self.p2 = (float(p2[0]), float(p2[1]))

        # Polynomial coefficients: B(s) = ((a*s + b)*s + c)*s
        self._cx = 3.0 * self.p1[0]
        self._bx = 3.0 * (self.p2[0] - self.p1[0]) - self._cx
        self._ax = 1.0 - self._cx - self._bx
        self._cy = 3.0 * self.p1[1]
        self._by = 3.0 * (self.p2[1] - self.p1[1]) - self._cy
        self._ay = 1.0 - self._cy - self._by

    @property
    def is_linear(self) -> bool:
        """True when both handles lie on the diagonal."""
        return self.p1[0] == self.p1[1] and self.p2[0] == self.p2[1]

    def _sample_x(self, s: float) -> float:
        return ((self._ax * s + self._bx) * s + self._cx) * s

    def _sample_y(self, s: float) -> float:
        return ((self._ay * s + self._by) * s + self._cy) * s

    def _sample_dx(self, s: float) -> float:
        return (3.0 * self._ax * s + 2.0 * self._bx) * s + self._cx

    def _solve_x(self, x: float) -> float:
        # Newton-Raphson first
        s = x
        for _ in range(BEZIER_NEWTON_ITERATIONS):
            error = self._sample_x(s) - x
            if abs(error) < BEZIER_EPSILON:
                return s
            slope = self._sample_dx(s)
            if abs(slope) < BEZIER_MIN_SLOPE:
                break
            s -= error / slope

        # Bisection fallback
        low, high = 0.0, 1.0
        s = x
        for _ in range(BEZIER_BISECTION_ITERATIONS):
            value = self._sample_x(s)
            if abs(value - x) < BEZIER_EPSILON:
                return s
            if value < x:
                low = s
            else:
                high = s
            s = (low + high) * 0.5
        return s

    def ease(self, progress: float) -> float:
        """
        Map linear progress to eased progress.

        Args:
            progress: Linear progress in [0, 1]

        Returns:
            Eased progress (may overshoot [0, 1] for overshooting handles)
        """
        if progress <= 0.0:
            return 0.0
        if progress >= 1.0:
            return 1.0
        if self.is_linear:
            return progress
        return self._sample_y(self._solve_x(progress))

    def __repr__(self):
        return f"CubicBezierEasing(p1={self.p1}, p2={self.p2})"


def segment_easing(
    out_tangent: Optional[Tuple[float, float]],
    in_tangent: Optional[Tuple[float, float]]
) -> Optional[CubicBezierEasing]:
    """
    Build the easing curve for a segment, or None for a linear segment.

    Args:
        out_tangent: Out handle of the segment's leading keyframe
        in_tangent: In handle of the segment's trailing keyframe
    """
    if out_tangent is None and in_tangent is None:
        return None
    curve = CubicBezierEasing(
        out_tangent if out_tangent is not None else (0.0, 0.0),
        in_tangent if in_tangent is not None else (1.0, 1.0),
    )
    return None if curve.is_linear else curve
