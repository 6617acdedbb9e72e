"""
PyQtGraph-based curve editing canvas.

Draws the speed curve and its handles and forwards pointer input to the
EditSession:

- Background, midline and FAST/SLOW labels
- Trim regions outside [first.x, last.x]
- The sampled curve, the playhead, point handles and the ghost cursor

The view box range is kept equal to its size in pixels, so view coordinates
are the canvas pixel coordinates the CoordinateMapper works in.
"""
from typing import Any, Optional
import logging

import numpy as np
import pyqtgraph as pg
from PyQt6.QtCore import QPointF, QRectF, Qt, QTimer
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsRectItem, QWidget

from app_context import AppContext
from config_manager import config
from curve_model import CurveObserver
from edit_session import HitTarget, PointerEvent, point_geometry
from enums import EditAction, EditState, GestureKind

logger = logging.getLogger(__name__)


class _RepaintOnChange(CurveObserver):
    """Refreshes the canvas whenever the curve changes."""

    def __init__(self, canvas: "CurveCanvas") -> None:
        self.canvas = canvas

    def on_curve_changed(self, operation: str, **kwargs: Any) -> None:
        self.canvas.refresh()


class CurveCanvas(pg.PlotWidget):
    """Interactive canvas for one curve.

    Mouse and touch (synthesized as mouse events by Qt) become PointerEvents:
    press -> down, move -> move, release -> up, double click or long press on
    a handle -> remove.
    """

    def __init__(self, context: AppContext, parent: Optional[QWidget] = None) -> None:
        """Initialize the canvas.

        Args:
            context: Application context owning the curve and edit session
            parent: Parent widget
        """
        super().__init__(parent=parent, background=config.get_qt_color('background'))
        self.context = context
        self.playhead_time: float | None = None
        self._targets: list[HitTarget] | None = None

        canvas_cfg = config.get_canvas_config()
        self.handle_radius = float(canvas_cfg.get("handleRadius", context.handle_radius))
        self.ghost_radius = float(canvas_cfg.get("ghostRadius", 10))
        self.label_spacer = int(canvas_cfg.get("labelSpacer", 5))
        self.curve_samples = int(canvas_cfg.get("curveSamples", 200))

        gesture_cfg = config.get_gesture_config()
        self.long_press_slop = float(gesture_cfg.get("longPressSlop", 6))
        self._press_pos: QPointF | None = None
        self._long_press_timer = QTimer(self)
        self._long_press_timer.setSingleShot(True)
        self._long_press_timer.setInterval(int(gesture_cfg.get("longPressMs", 600)))
        self._long_press_timer.timeout.connect(self._on_long_press)

        self.setMouseTracking(True)
        self.setMinimumSize(200, 100)
        self._setup_plot(canvas_cfg)

        # The session hit-tests against what this canvas draws
        self.context.session.geometry_provider = self.hit_targets
        self._observer = _RepaintOnChange(self)
        self.context.model.add_observer(self._observer)

        mapper = self.context.mapper
        self.set_viewport(mapper.width, mapper.height, self.devicePixelRatioF())

    def _setup_plot(self, canvas_cfg: dict[str, Any]) -> None:
        """Create the plot items, bottom to top in draw order."""
        plot = self.getPlotItem()
        plot.hideAxis('left')
        plot.hideAxis('bottom')
        plot.hideButtons()
        plot.setMenuEnabled(False)
        plot.setMouseEnabled(x=False, y=False)
        plot.layout.setContentsMargins(0, 0, 0, 0)

        self.view_box = plot.getViewBox()
        self.view_box.invertY(True)  # Pixel space: y grows downward
        self.view_box.enableAutoRange(enable=False)
        self.view_box.setDefaultPadding(0.0)
        self.view_box.sigResized.connect(self._on_view_resized)

        trim_color = config.get_qt_color('trimRegion')
        trim_color.setAlpha(160)
        self.trim_left = self._create_region(trim_color)
        self.trim_right = self._create_region(trim_color)

        self.mid_line = pg.InfiniteLine(
            pos=0, angle=0, movable=False,
            pen=self._create_pen('midLine', width=canvas_cfg.get("midLineWidth", 2))
        )
        plot.addItem(self.mid_line)

        font = QFont(config.get_font('primary'))
        font.setPixelSize(10)
        text_color = config.get_qt_color('textColor')
        self.fast_label = pg.TextItem(config.get_string("ui", "fastLabel", "FAST"), color=text_color, anchor=(0, 0))
        self.slow_label = pg.TextItem(config.get_string("ui", "slowLabel", "SLOW"), color=text_color, anchor=(0, 1))
        for label in (self.fast_label, self.slow_label):
            label.setFont(font)
            plot.addItem(label)

        self.curve_item = pg.PlotDataItem(
            pen=self._create_pen('curve', width=canvas_cfg.get("curveWidth", 2))
        )
        plot.addItem(self.curve_item)

        self.playhead = pg.InfiniteLine(pos=0, angle=90, movable=False, pen=self._create_pen('playhead'))
        self.playhead.setVisible(False)
        plot.addItem(self.playhead)

        self.handles = pg.ScatterPlotItem(
            pxMode=True,
            pen=pg.mkPen(None),
            brush=pg.mkBrush(config.get_qt_color('handle'))
        )
        self.handles.setZValue(50)
        plot.addItem(self.handles)

        self.ghost = pg.ScatterPlotItem(
            pxMode=True,
            pen=pg.mkPen(None),
            brush=pg.mkBrush(config.get_qt_color('ghost'))
        )
        self.ghost.setZValue(60)
        plot.addItem(self.ghost)

    def _create_pen(self, color_key: str, width: float = 1) -> Any:
        color = QColor(config.get_qt_color(color_key))
        return pg.mkPen(color=color, width=width)

    def _create_region(self, color: QColor) -> QGraphicsRectItem:
        region = QGraphicsRectItem()
        region.setBrush(QBrush(color))
        region.setPen(QPen(Qt.PenStyle.NoPen))
        region.setZValue(-10)
        region.setVisible(False)
        self.getPlotItem().addItem(region)
        return region

    # ========================================================================
    # Viewport
    # ========================================================================

    def _on_view_resized(self) -> None:
        width = self.view_box.width()
        height = self.view_box.height()
        if width > 0 and height > 0:
            self.set_viewport(width, height, self.devicePixelRatioF())

    def set_viewport(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        """Reconfigure the coordinate mapping for a new canvas size."""
        mapper = self.context.mapper
        mapper.resize(width, height, pixel_ratio)
        self.view_box.setRange(xRange=(0, width), yRange=(0, height), padding=0)
        logger.debug("Canvas viewport %sx%s @%sx (%dx%d device pixels)",
                     width, height, pixel_ratio, *mapper.device_size)
        self.refresh()

    # ========================================================================
    # Rendering
    # ========================================================================

    def hit_targets(self) -> list[HitTarget]:
        """Handle geometry as currently drawn, in draw order."""
        if self._targets is None:
            self._targets = point_geometry(self.context.model, self.context.mapper, self.handle_radius)
        return self._targets

    def refresh(self) -> None:
        """Rebuild every plot item from the curve and session state."""
        model = self.context.model
        mapper = self.context.mapper
        width, height = mapper.width, mapper.height

        self.mid_line.setValue(height / 2)
        self.fast_label.setPos(self.label_spacer, self.label_spacer)
        self.slow_label.setPos(self.label_spacer, height - self.label_spacer)

        start, end = model.active_window
        left_edge = mapper.to_screen(start, 0)[0]
        right_edge = mapper.to_screen(end, 0)[0]
        self.trim_left.setRect(QRectF(0, 0, left_edge, height))
        self.trim_left.setVisible(start > 0.0)
        self.trim_right.setRect(QRectF(right_edge, 0, width - right_edge, height))
        self.trim_right.setVisible(end < 1.0)

        xs, ys = model.sample(self.curve_samples)
        screen_xs, screen_ys = mapper.to_screen(xs, ys)
        self.curve_item.setData(np.asarray(screen_xs), np.asarray(screen_ys))

        self._targets = point_geometry(model, mapper, self.handle_radius)
        self.handles.setData(
            x=[t.screen_x for t in self._targets],
            y=[t.screen_y for t in self._targets],
            size=self.handle_radius * 2
        )

        self._refresh_overlay()

    def _refresh_overlay(self) -> None:
        """Update the items that move without a curve change."""
        ghost = self.context.session.ghost
        if ghost is not None:
            self.ghost.setData(x=[ghost[0]], y=[ghost[1]], size=self.ghost_radius * 2)
        else:
            self.ghost.clear()

        if self.playhead_time is None:
            self.playhead.setVisible(False)
        else:
            self.playhead.setValue(self.context.mapper.to_screen(self.playhead_time, 0)[0])
            self.playhead.setVisible(True)

    def set_playhead(self, t: float | None) -> None:
        """Place the playhead at normalized time t (None hides it)."""
        self.playhead_time = t
        self._refresh_overlay()

    # ========================================================================
    # Pointer input
    # ========================================================================

    def handle_pointer(self, kind: GestureKind, x: float, y: float) -> EditAction:
        """Feed a gesture at canvas coordinates to the edit session."""
        session = self.context.session
        action = session.handle(PointerEvent(kind, x, y))

        if session.state == EditState.DRAGGING or session.hovering:
            self.setCursor(Qt.CursorShape.PointingHandCursor)
        else:
            self.unsetCursor()

        if action == EditAction.NONE and kind == GestureKind.MOVE:
            self._refresh_overlay()
        return action

    def _canvas_pos(self, event: Any) -> QPointF:
        scene_pos = self.mapToScene(event.position().toPoint())
        return self.view_box.mapSceneToView(scene_pos)

    def mousePressEvent(self, event: Any) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        pos = self._canvas_pos(event)
        action = self.handle_pointer(GestureKind.DOWN, pos.x(), pos.y())
        if action == EditAction.DRAG_STARTED:
            self._press_pos = pos
            self._long_press_timer.start()
        event.accept()

    def mouseMoveEvent(self, event: Any) -> None:
        pos = self._canvas_pos(event)
        if self._press_pos is not None:
            travel = pos - self._press_pos
            if abs(travel.x()) + abs(travel.y()) > self.long_press_slop:
                self._cancel_long_press()
        self.handle_pointer(GestureKind.MOVE, pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event: Any) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        self._cancel_long_press()
        pos = self._canvas_pos(event)
        self.handle_pointer(GestureKind.UP, pos.x(), pos.y())
        event.accept()

    def mouseDoubleClickEvent(self, event: Any) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        pos = self._canvas_pos(event)
        self.handle_pointer(GestureKind.REMOVE, pos.x(), pos.y())
        event.accept()

    def _cancel_long_press(self) -> None:
        self._long_press_timer.stop()
        self._press_pos = None

    def _on_long_press(self) -> None:
        """Held a handle without moving: remove it and end the drag."""
        if self._press_pos is None:
            return
        pos = self._press_pos
        self._press_pos = None
        action = self.handle_pointer(GestureKind.REMOVE, pos.x(), pos.y())
        logger.debug("Long press at (%.1f, %.1f): %s", pos.x(), pos.y(), action)
        self.handle_pointer(GestureKind.UP, pos.x(), pos.y())
