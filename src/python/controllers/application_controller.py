"""ApplicationController - frame loop and wiring for the SlowFast window.

This controller connects the application context (curve, edit session,
playback driver) to the window:

- Picks the time source (video, simulated clock, scrubbing clock)
- Runs the per-frame loop: playback tick, playhead, labels
- Routes menu actions (open video, easing, reset) to the context
"""

from typing import Any
import logging

from PyQt6.QtCore import QObject, QTimer

from app_context import AppContext
from config_manager import ConfigManager, config
from enums import EasingKind, TimeSourceKind
from error_handler import ErrorHandler
from time_sources import DEFAULT_DURATION_MS, ScrubbingTicker, SimulatedTicker

logger = logging.getLogger(__name__)


class ApplicationController(QObject):
    """Main controller owning the frame loop.

    The frame timer and pointer events are both dispatched by the Qt event
    loop, so a pointer edit always completes before the next tick reads the
    curve.
    """

    def __init__(self, context: AppContext, cfg: ConfigManager | None = None) -> None:
        """Initialize the ApplicationController.

        Args:
            context: Application context owning the curve and playback driver
            cfg: Configuration, defaults to the loaded config.json
        """
        super().__init__()
        self.context = context
        self.cfg = cfg or config
        self.view: Any = None

        playback_cfg = self.cfg.get_playback_config()
        source_str = playback_cfg.get("timeSource", TimeSourceKind.VIDEO)
        try:
            self.time_source_kind = TimeSourceKind(source_str)
        except ValueError:
            logger.warning("Invalid time source '%s', using '%s'", source_str, TimeSourceKind.VIDEO)
            self.time_source_kind = TimeSourceKind.VIDEO
        self.simulated_duration = float(playback_cfg.get("simulatedDurationMs", DEFAULT_DURATION_MS))

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(self.cfg.get_frame_interval(16))
        self.frame_timer.timeout.connect(self.tick)

        logger.debug("ApplicationController initialized with time source: %s", self.time_source_kind)

    def set_view(self, view: Any) -> None:
        """Set the view, choose the time source and start the frame loop.

        Args:
            view: The SlowFastView window instance
        """
        self.view = view

        video = getattr(view, 'video_source', None)
        if self.time_source_kind == TimeSourceKind.VIDEO and video is not None:
            self.context.set_time_source(video)
        elif self.time_source_kind == TimeSourceKind.SCRUBBING and video is not None:
            self.context.set_time_source(ScrubbingTicker(video.seek, self.simulated_duration))
            video.media_loaded.connect(self._on_scrub_media_loaded)
        else:
            if self.time_source_kind != TimeSourceKind.SIMULATED:
                logger.warning("No video output available, using a simulated clock")
            self.context.set_time_source(SimulatedTicker(self.simulated_duration))

        self.view.video_file_selected.connect(self.open_video)
        self.view.easing_selected.connect(self.set_easing)
        self.view.reset_requested.connect(self.reset_curve)
        self.view.set_active_easing(self.context.easing_kind)

        video_path = self.cfg.get_playback_config().get("videoPath")
        if video_path:
            self.open_video(video_path)

        self.frame_timer.start()

    def tick(self) -> None:
        """Run one frame: playback rate, playhead and labels."""
        driver = self.context.driver
        speed = driver.tick()

        if self.view is None:
            return
        self.view.canvas.set_playhead(driver.last_time)
        self.view.update_time_display(driver.time_source.current_time, speed)

    def open_video(self, path: str) -> None:
        video = getattr(self.view, 'video_source', None)
        if video is None:
            ErrorHandler.show_warning(f"Cannot open {path}: no video output", title="Video")
            return
        video.load(path)
        if self.time_source_kind == TimeSourceKind.SCRUBBING:
            video.pause()

    def set_easing(self, name: str) -> None:
        try:
            self.context.set_easing(name)
        except ValueError as e:
            ErrorHandler.show_warning(f"Ignoring easing selection: {e}", title="Easing")
            return
        self.view.set_active_easing(EasingKind(name))

    def reset_curve(self) -> None:
        self.context.model.reset(self.cfg.get_default_points())
        logger.info("Curve reset")

    def _on_scrub_media_loaded(self, path: str) -> None:
        source = self.context.driver.time_source
        video = self.view.video_source
        if isinstance(source, ScrubbingTicker) and video.duration > 0:
            source.set_duration(video.duration)
            logger.debug("Scrubbing clock duration set to %.0f ms from %s", video.duration, path)
