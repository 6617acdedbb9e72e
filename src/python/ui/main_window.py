"""Main SlowFast window: video on top, curve canvas below, time/speed labels."""

from typing import Any
import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QActionGroup, QFont
from PyQt6.QtMultimediaWidgets import QVideoWidget
from PyQt6.QtWidgets import QFileDialog, QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

from config_manager import config
from enums import EasingKind
from ui.curve_canvas import CurveCanvas
from ui.video_player import VideoTimeSource

logger = logging.getLogger(__name__)


class SlowFastView(QMainWindow):
    """Top level window.

    Signals:
        video_file_selected: Emitted with a path chosen from File > Open Video
        easing_selected: Emitted with an EasingKind value from the Curve menu
        reset_requested: Emitted from Curve > Reset Curve
    """

    video_file_selected = pyqtSignal(str)
    easing_selected = pyqtSignal(str)
    reset_requested = pyqtSignal()

    def __init__(self, controller: Any) -> None:
        super().__init__()
        self.controller = controller
        self.easing_actions: dict[EasingKind, QAction] = {}

        self.init_ui()
        self._setup_menu_bar()

    def init_ui(self) -> None:
        self.setWindowTitle(config.get_string("ui", "windowTitle", "SlowFast"))

        canvas_cfg = config.get_canvas_config()
        width = canvas_cfg.get("width", 600)
        height = canvas_cfg.get("height", 300)

        main_widget = QWidget()
        main_layout = QVBoxLayout()
        main_widget.setLayout(main_layout)
        main_widget.setStyleSheet(
            f"background-color: {config.get_color('background')}; color: {config.get_color('textColor')};"
        )
        self.setCentralWidget(main_widget)

        self.video_widget = QVideoWidget()
        self.video_widget.setMinimumSize(width, height)
        main_layout.addWidget(self.video_widget, stretch=2)
        self.video_source = VideoTimeSource(self.video_widget, self)

        label_font = QFont(config.get_font('mono'))
        label_layout = QHBoxLayout()
        self.speed_label = QLabel()
        self.time_label = QLabel()
        for label in (self.speed_label, self.time_label):
            label.setFont(label_font)
            label_layout.addWidget(label)
        label_layout.addStretch(1)
        main_layout.addLayout(label_layout)

        self.canvas = CurveCanvas(self.controller.context)
        self.canvas.setMinimumHeight(height // 2)
        main_layout.addWidget(self.canvas, stretch=1)

        self.update_time_display(0.0, 1.0)
        self.resize(width + 40, height * 2 + 80)

    def _setup_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(config.get_string("menus", "file", "File"))
        open_action = QAction(config.get_string("menus", "openVideo", "Open Video..."), self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.choose_video_file)
        file_menu.addAction(open_action)

        curve_menu = menu_bar.addMenu(config.get_string("menus", "curve", "Curve"))
        easing_menu = curve_menu.addMenu(config.get_string("menus", "easing", "Easing"))
        easing_group = QActionGroup(self)
        easing_group.setExclusive(True)
        for kind in EasingKind:
            action = QAction(config.get_string("easing", kind.value, kind.value), self)
            action.setCheckable(True)
            action.triggered.connect(lambda checked, k=kind: self.easing_selected.emit(k.value))
            easing_group.addAction(action)
            easing_menu.addAction(action)
            self.easing_actions[kind] = action

        reset_action = QAction(config.get_string("menus", "resetCurve", "Reset Curve"), self)
        reset_action.triggered.connect(self.reset_requested.emit)
        curve_menu.addAction(reset_action)

    def choose_video_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            config.get_string("dialogs", "openVideoTitle", "Open Video"),
            "",
            config.get_string("dialogs", "videoFilter", "All Files (*)")
        )
        if path:
            self.video_file_selected.emit(path)

    def set_active_easing(self, kind: EasingKind) -> None:
        action = self.easing_actions.get(kind)
        if action is not None:
            action.setChecked(True)

    def update_time_display(self, time_ms: float, speed: float | None) -> None:
        """Show the playback position in seconds and the current speed."""
        time_text = config.get_string("ui", "timeLabel", "Time")
        speed_text = config.get_string("ui", "speedLabel", "Speed")
        self.time_label.setText(f"{time_text}: {time_ms / 1000:.2f}s")
        if speed is not None:
            self.speed_label.setText(f"{speed_text}: {speed:.2f}x")

    def keyPressEvent(self, event: Any) -> None:
        if event.key() == Qt.Key.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)
