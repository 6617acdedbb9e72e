"""Pointer driven editing of the curve's control points.

This module turns normalized pointer gestures (down, move, up, remove) into
CurveModel mutations:

- Down on a handle starts a drag, down on empty space inserts a point
- Move drags the grabbed point (keeping the grab offset) and moves the ghost
- Up ends the drag
- Remove (double click, long press) deletes an interior point

Handles are hit-tested against the geometry the renderer last drew, supplied
as HitTarget entries that pair each circle with the model point it shows.
"""
from dataclasses import dataclass
from typing import Callable, Sequence
import logging

from coordinate_mapper import CoordinateMapper
from curve_model import ControlPoint, CurveModel
from custom_types import ScreenPoint
from enums import EditAction, EditState, GestureKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HitTarget:
    """A drawn handle: circle centre and radius in pixels, and its model point."""
    screen_x: float
    screen_y: float
    radius: float
    point: ControlPoint

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.screen_x
        dy = y - self.screen_y
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass(frozen=True)
class PointerEvent:
    """A pointer gesture in canvas pixel coordinates."""
    kind: GestureKind
    x: float = 0.0
    y: float = 0.0


@dataclass
class DragState:
    target: ControlPoint
    grab_offset: ScreenPoint


GeometryProvider = Callable[[], Sequence[HitTarget]]


def point_geometry(model: CurveModel, mapper: CoordinateMapper, radius: float) -> list[HitTarget]:
    """Build handle geometry for every curve point, in draw order."""
    targets: list[HitTarget] = []
    for point in model.points:
        sx, sy = mapper.to_screen(point.x, point.y)
        targets.append(HitTarget(sx, sy, radius, point))
    return targets


class EditSession:
    """State machine for point editing.

    States:
        IDLE: No point grabbed; down inserts or grabs
        DRAGGING: A point follows the pointer until up

    All gestures are no-ops on a miss or invalid input; nothing raises.
    """

    def __init__(
        self,
        model: CurveModel,
        mapper: CoordinateMapper,
        geometry_provider: GeometryProvider
    ) -> None:
        """Initialize the edit session.

        Args:
            model: Curve to edit
            mapper: Converts pointer pixels to normalized curve space
            geometry_provider: Returns the handles as last drawn by the renderer
        """
        self.model = model
        self.mapper = mapper
        self.geometry_provider = geometry_provider
        self.drag: DragState | None = None
        self.ghost: ScreenPoint | None = None
        self.hovering: bool = False

    @property
    def state(self) -> EditState:
        return EditState.DRAGGING if self.drag is not None else EditState.IDLE

    @property
    def target(self) -> ControlPoint | None:
        return self.drag.target if self.drag is not None else None

    def hit_test(self, x: float, y: float) -> HitTarget | None:
        """Return the first handle containing (x, y).

        Overlapping handles resolve to whichever comes first in the geometry
        list.
        """
        for target in self.geometry_provider():
            if target.contains(x, y):
                return target
        return None

    def handle(self, event: PointerEvent) -> EditAction:
        """Dispatch a pointer event to the matching gesture handler."""
        if event.kind == GestureKind.DOWN:
            return self.pointer_down(event.x, event.y)
        if event.kind == GestureKind.MOVE:
            return self.pointer_move(event.x, event.y)
        if event.kind == GestureKind.UP:
            return self.pointer_up()
        if event.kind == GestureKind.REMOVE:
            return self.remove_gesture(event.x, event.y)
        return EditAction.NONE

    def pointer_down(self, x: float, y: float) -> EditAction:
        hit = self.hit_test(x, y)
        if hit is not None:
            self.drag = DragState(
                target=hit.point,
                grab_offset=(x - hit.screen_x, y - hit.screen_y)
            )
            logger.debug("Drag started on point (%.3f, %.3f)", hit.point.x, hit.point.y)
            return EditAction.DRAG_STARTED

        # Empty space: insert a point under the pointer
        nx, ny = self.mapper.to_normalized(x, y)
        if self.model.find_enclosing_segment(nx) is None:
            return EditAction.NONE
        inserted = self.model.insert_point(ControlPoint(nx, ny))
        return EditAction.INSERTED if inserted is not None else EditAction.NONE

    def pointer_move(self, x: float, y: float) -> EditAction:
        self.ghost = (x, y)

        if self.drag is None:
            self.hovering = self.hit_test(x, y) is not None
            return EditAction.NONE

        gx, gy = self.drag.grab_offset
        nx, ny = self.mapper.to_normalized(x - gx, y - gy)
        if self.model.move_point(self.drag.target, nx, ny):
            return EditAction.MOVED
        return EditAction.NONE

    def pointer_up(self) -> EditAction:
        if self.drag is None:
            return EditAction.NONE
        logger.debug("Drag finished at (%.3f, %.3f)", self.drag.target.x, self.drag.target.y)
        self.drag = None
        return EditAction.RELEASED

    def remove_gesture(self, x: float, y: float) -> EditAction:
        hit = self.hit_test(x, y)
        if hit is None or self.model.is_endpoint(hit.point):
            return EditAction.NONE
        if not self.model.remove_point(hit.point):
            return EditAction.NONE
        if self.drag is not None and self.drag.target is hit.point:
            self.drag = None
        self.hovering = False
        return EditAction.REMOVED
