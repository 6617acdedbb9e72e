"""
CurveModel: the ordered control points of a speed curve.

- Always keeps a first and a last point (the endpoints)
- Points are strictly ascending by x; moves never cross a neighbour
- Endpoints cannot be removed; moving them inward trims the active window
- Queries work in normalized space only (x in [0, 1], y in [-1, 1])
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from custom_types import SampleArray
from easing import EasingFunc, quadratic_in_out

logger = logging.getLogger(__name__)

DEFAULT_POINTS: tuple[tuple[float, float], ...] = ((0.0, 0.0), (0.333, 0.0), (0.667, 0.0), (1.0, 0.0))
DEFAULT_MIN_GAP = 0.001


@dataclass(eq=False)
class ControlPoint:
    """A user placed anchor of the curve.

    Compared by identity: two points with the same coordinates are still
    different handles.
    """
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class CurveObserver(ABC):
    """Abstract base class for curve change observers."""

    @abstractmethod
    def on_curve_changed(self, operation: str, **kwargs: Any) -> None:
        """Called after the curve is modified."""
        pass


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class CurveModel:
    """Curve storage that always maintains its endpoints and ordering."""

    _points: list[ControlPoint]
    _easing: EasingFunc
    _observers: list[CurveObserver]
    min_gap: float

    def __init__(
        self,
        points: Iterable[tuple[float, float]] | None = None,
        easing: EasingFunc | None = None,
        min_gap: float = DEFAULT_MIN_GAP
    ) -> None:
        """Initialize the curve.

        Args:
            points: (x, y) pairs sorted by x, defaults to a flat four point curve
            easing: Easing applied inside each segment, defaults to quadratic in/out
            min_gap: Smallest x distance kept between neighbouring points

        Raises:
            ValueError: If the points break the curve invariants
        """
        self.min_gap = float(min_gap)
        self._easing = easing or quadratic_in_out
        self._observers = []
        self._points = self._build_points(DEFAULT_POINTS if points is None else points)

    @staticmethod
    def _build_points(points: Iterable[tuple[float, float]]) -> list[ControlPoint]:
        built = [ControlPoint(float(x), float(y)) for x, y in points]
        if len(built) < 2:
            raise ValueError(f"A curve needs at least 2 points, got {len(built)}")
        if built[0].x != 0.0 or built[-1].x != 1.0:
            raise ValueError("Curve must start at x=0 and end at x=1")
        for left, right in zip(built, built[1:]):
            if not left.x < right.x:
                raise ValueError(f"Points must be strictly ascending by x ({left.x} >= {right.x})")
        for point in built:
            if not -1.0 <= point.y <= 1.0:
                raise ValueError(f"Point y={point.y} outside [-1, 1]")
        return built

    # Observers

    def add_observer(self, observer: CurveObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: CurveObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, operation: str, **kwargs: Any) -> None:
        for observer in self._observers:
            observer.on_curve_changed(operation, **kwargs)

    # Read access

    @property
    def points(self) -> tuple[ControlPoint, ...]:
        """Snapshot of the points in ascending x order."""
        return tuple(self._points)

    @property
    def first(self) -> ControlPoint:
        return self._points[0]

    @property
    def last(self) -> ControlPoint:
        return self._points[-1]

    def __len__(self) -> int:
        return len(self._points)

    def index_of(self, point: ControlPoint) -> int | None:
        """Position of the point (by identity), None if it is not in the curve."""
        for i, candidate in enumerate(self._points):
            if candidate is point:
                return i
        return None

    def is_endpoint(self, point: ControlPoint) -> bool:
        return point is self._points[0] or point is self._points[-1]

    def as_tuples(self) -> list[tuple[float, float]]:
        return [p.as_tuple() for p in self._points]

    @property
    def active_window(self) -> tuple[float, float]:
        """(start, end) of the playable region set by the endpoints."""
        return (self._points[0].x, self._points[-1].x)

    @property
    def is_trimmed(self) -> bool:
        start, end = self.active_window
        return start > 0.0 or end < 1.0

    @property
    def easing(self) -> EasingFunc:
        return self._easing

    def set_easing(self, easing: EasingFunc) -> None:
        """Swap the easing used inside segments."""
        self._easing = easing
        self._notify('easing')

    # Queries

    def find_enclosing_segment(self, t: float) -> tuple[ControlPoint, ControlPoint] | None:
        """Find the adjacent points whose x bracket t.

        Returns (point, point) when t lands exactly on a point, and None when t
        is outside [0, 1] or outside the active window.
        """
        if not 0.0 <= t <= 1.0:
            return None

        left: ControlPoint | None = None
        for point in self._points:
            if point.x == t:
                return (point, point)
            if point.x < t:
                left = point
            elif left is not None:
                return (left, point)
            else:
                return None
        return None

    def evaluate(self, t: float) -> float | None:
        """Curve value at normalized time t, None outside the curve's domain."""
        segment = self.find_enclosing_segment(t)
        if segment is None:
            return None

        left, right = segment
        if left is right:
            return left.y

        u = (t - left.x) / (right.x - left.x)
        return left.y + (right.y - left.y) * self._easing(u)

    def sample(self, count: int) -> tuple[SampleArray, SampleArray]:
        """Evaluate the curve at evenly spaced x across the active window.

        Point x positions are merged in so corners are drawn exactly.

        Returns:
            Tuple of (xs, ys) arrays
        """
        start, end = self.active_window
        xs = np.linspace(start, end, max(2, int(count)))
        xs = np.union1d(xs, np.array([p.x for p in self._points]))
        ys = np.array([self.evaluate(float(x)) for x in xs], dtype=np.float64)
        return xs, ys

    # Mutations

    def insert_point(self, point: ControlPoint) -> ControlPoint | None:
        """Insert a new point keeping ascending order.

        Rejected (returns None) when x is outside (0, 1), outside the active
        window, or already taken by another point.
        """
        x = point.x
        if not (0.0 < x < 1.0) or math.isnan(point.y):
            logger.debug("Insert rejected: x=%s outside (0, 1)", x)
            return None

        segment = self.find_enclosing_segment(x)
        if segment is None:
            logger.debug("Insert rejected: x=%s outside active window %s", x, self.active_window)
            return None

        left, right = segment
        if left is right:
            logger.debug("Insert rejected: x=%s collides with an existing point", x)
            return None

        point.y = _clamp(point.y, -1.0, 1.0)
        index = self.index_of(right)
        self._points.insert(index, point)
        logger.debug("Inserted point (%.3f, %.3f) at index %d", point.x, point.y, index)
        self._notify('insert', point=point, index=index)
        return point

    def remove_point(self, point: ControlPoint) -> bool:
        """Remove an interior point (endpoints are always kept)."""
        index = self.index_of(point)
        if index is None:
            return False
        if index == 0 or index == len(self._points) - 1:
            logger.debug("Remove rejected: endpoint at index %d", index)
            return False

        del self._points[index]
        logger.debug("Removed point (%.3f, %.3f) from index %d", point.x, point.y, index)
        self._notify('remove', point=point, index=index)
        return True

    def move_point(self, point: ControlPoint, x: float, y: float) -> bool:
        """Move a point, clamping x between its neighbours and y to [-1, 1].

        The first and last points may move inward (trimming) but never past
        their only neighbour.
        """
        index = self.index_of(point)
        if index is None or math.isnan(x) or math.isnan(y):
            return False

        last_index = len(self._points) - 1
        lo = self._points[index - 1].x + self.min_gap if index > 0 else 0.0
        hi = self._points[index + 1].x - self.min_gap if index < last_index else 1.0
        lo = max(lo, 0.0)
        hi = min(hi, 1.0)

        if lo <= hi:
            point.x = _clamp(x, lo, hi)
        # else: neighbours are closer than min_gap on both sides, x stays put
        point.y = _clamp(y, -1.0, 1.0)
        self._notify('move', point=point, index=index)
        return True

    def reset(self, points: Sequence[tuple[float, float]] | None = None) -> None:
        """Replace all points, defaulting to the flat four point curve.

        Raises:
            ValueError: If the points break the curve invariants
        """
        self._points = self._build_points(DEFAULT_POINTS if points is None else points)
        self._notify('reset')
