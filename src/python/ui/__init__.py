"""UI components package for SlowFast."""

from ui.curve_canvas import CurveCanvas
from ui.main_window import SlowFastView
from ui.video_player import VideoTimeSource

__all__ = [
    "CurveCanvas",
    "SlowFastView",
    "VideoTimeSource",
]
