"""Video playback backed by Qt Multimedia.

VideoTimeSource exposes a QMediaPlayer as a time source for the playback
driver: position and duration in milliseconds, playback rate control and
seeking. The player loops forever.
"""

import logging
import math

from PyQt6.QtCore import QObject, QUrl, pyqtSignal
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer
from PyQt6.QtMultimediaWidgets import QVideoWidget

from error_handler import ErrorHandler

logger = logging.getLogger(__name__)


class VideoTimeSource(QObject):
    """Media player wrapper with the time source interface.

    Signals:
        media_loaded: Emitted with the file path once the media is ready
        media_failed: Emitted with an error message when loading fails
    """

    media_loaded = pyqtSignal(str)
    media_failed = pyqtSignal(str)

    def __init__(self, video_widget: QVideoWidget | None = None, parent: QObject | None = None) -> None:
        """Initialize the player.

        Args:
            video_widget: Where frames are shown (None for no output)
            parent: Parent QObject
        """
        super().__init__(parent)
        self.player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.audio_output.setMuted(True)
        self.player.setAudioOutput(self.audio_output)
        self.player.setLoops(QMediaPlayer.Loops.Infinite)
        if video_widget is not None:
            self.player.setVideoOutput(video_widget)

        self.source_path: str | None = None
        self.player.mediaStatusChanged.connect(self._on_media_status_changed)
        self.player.errorOccurred.connect(self._on_error)

    @property
    def current_time(self) -> float:
        return float(self.player.position())

    @property
    def duration(self) -> float:
        return float(self.player.duration())

    def set_playback_rate(self, speed: float) -> None:
        if not math.isfinite(speed) or speed <= 0:
            return
        if abs(self.player.playbackRate() - speed) > 1e-3:
            self.player.setPlaybackRate(speed)

    def seek(self, position_ms: float) -> None:
        self.player.setPosition(int(position_ms))

    def load(self, path: str) -> None:
        """Open a video file and start looping playback."""
        logger.info("Loading video: %s", path)
        self.source_path = path
        self.player.setSource(QUrl.fromLocalFile(path))
        self.player.play()

    def pause(self) -> None:
        self.player.pause()

    def _on_media_status_changed(self, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.LoadedMedia and self.source_path:
            ErrorHandler.show_info(f"Loaded {self.source_path} ({self.duration:.0f} ms)", title="Video")
            self.media_loaded.emit(self.source_path)
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._on_error(QMediaPlayer.Error.FormatError, "Invalid media")

    def _on_error(self, error: QMediaPlayer.Error, message: str = "") -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        text = message or self.player.errorString() or str(error)
        ErrorHandler.show_error(f"{self.source_path}: {text}", title="Video")
        self.media_failed.emit(text)
