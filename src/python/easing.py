"""
Easing functions for shaping interpolation inside a curve segment.

Every easing maps u in [0, 1] to [0, 1] with ease(0) == 0 and ease(1) == 1.
Functions are looked up by EasingKind name so the active easing can come
straight from config or a menu selection.
"""

from typing import Callable

from enums import EasingKind

EasingFunc = Callable[[float], float]

# CSS ease-in-out control points
BEZIER_P1 = (0.42, 0.0)
BEZIER_P2 = (0.58, 1.0)

_NEWTON_ITERATIONS = 8
_BISECTION_ITERATIONS = 40
_EPSILON = 1e-7


def identity(u: float) -> float:
    return u


def quadratic_in_out(u: float) -> float:
    """Accelerate through the first half, decelerate through the second."""
    if u < 0.5:
        return 2 * u * u
    return -1 + (4 - 2 * u) * u


def _bezier_coord(s: float, p1: float, p2: float) -> float:
    # Cubic bezier with fixed endpoints 0 and 1
    inv = 1 - s
    return 3 * inv * inv * s * p1 + 3 * inv * s * s * p2 + s * s * s


def _bezier_slope(s: float, p1: float, p2: float) -> float:
    inv = 1 - s
    return 3 * inv * inv * p1 + 6 * inv * s * (p2 - p1) + 3 * s * s * (1 - p2)


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunc:
    """Build an easing from a unit cubic bezier, solving x(s) = u for s.

    Newton iterations first, falling back to bisection where the slope is flat.
    """
    def ease(u: float) -> float:
        if u <= 0.0:
            return 0.0
        if u >= 1.0:
            return 1.0

        s = u
        for _ in range(_NEWTON_ITERATIONS):
            error = _bezier_coord(s, x1, x2) - u
            if abs(error) < _EPSILON:
                return _bezier_coord(s, y1, y2)
            slope = _bezier_slope(s, x1, x2)
            if abs(slope) < 1e-6:
                break
            s -= error / slope

        lo, hi = 0.0, 1.0
        s = u
        for _ in range(_BISECTION_ITERATIONS):
            x = _bezier_coord(s, x1, x2)
            if abs(x - u) < _EPSILON:
                break
            if x < u:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
        return _bezier_coord(s, y1, y2)

    return ease


bezier_in_out = cubic_bezier(BEZIER_P1[0], BEZIER_P1[1], BEZIER_P2[0], BEZIER_P2[1])

EASINGS: dict[EasingKind, EasingFunc] = {
    EasingKind.QUADRATIC_IN_OUT: quadratic_in_out,
    EasingKind.BEZIER_IN_OUT: bezier_in_out,
    EasingKind.IDENTITY: identity,
}


def get_easing(kind: str | EasingKind) -> EasingFunc:
    """Look up an easing function by name.

    Args:
        kind: EasingKind or its string value (e.g. 'quadratic-in-out')

    Returns:
        The easing function

    Raises:
        ValueError: If the name is not a known easing
    """
    try:
        kind = EasingKind(kind)
    except ValueError:
        raise ValueError(f"Unknown easing '{kind}' (must be one of: {[k.value for k in EasingKind]})")
    return EASINGS[kind]
