"""
Clock based time sources for the playback driver.

SimulatedTicker runs its own looping clock. Like a media player it keeps
running at the last rate it was given, whether or not a new rate arrives.
The position catches up with wall time whenever it is read.
ScrubbingTicker does the same and pushes each new position to a seek
callback, so a paused video can be stepped frame by frame at any speed.
The media player backed source lives in ui.video_player.
"""

import logging
import math
import time
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000.0


class SimulatedTicker:
    """Looping clock advanced by elapsed wall time times the current playback rate."""

    def __init__(
        self,
        duration_ms: float = DEFAULT_DURATION_MS,
        clock: Callable[[], float] = time.perf_counter
    ) -> None:
        """Initialize the ticker.

        Args:
            duration_ms: Loop length in milliseconds
            clock: Returns the current time in seconds
        """
        self._duration = float(duration_ms)
        self._clock = clock
        self._current_time = 0.0
        self._last_tick = clock()
        self.playback_rate = 1.0

    @property
    def current_time(self) -> float:
        self._catch_up()
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    def set_duration(self, duration_ms: float) -> None:
        self._duration = float(duration_ms)
        if self._duration > 0:
            self._current_time %= self._duration

    def set_playback_rate(self, speed: float) -> None:
        """Change the speed; time elapsed so far counts at the previous speed."""
        if not speed or not math.isfinite(speed):
            speed = 1.0
        self._catch_up()
        self.playback_rate = speed

    def seek(self, position_ms: float) -> None:
        self._current_time = float(position_ms)
        self._last_tick = self._clock()
        self._wrap()

    def _catch_up(self) -> None:
        now = self._clock()
        lapsed_ms = (now - self._last_tick) * 1000.0
        self._last_tick = now
        if lapsed_ms > 0:
            self._advance(lapsed_ms * self.playback_rate)

    def _advance(self, delta_ms: float) -> None:
        self._current_time += delta_ms
        self._wrap()

    def _wrap(self) -> None:
        if self._duration > 0:
            self._current_time %= self._duration


class ScrubbingTicker(SimulatedTicker):
    """Simulated clock that seeks an external player to every new position."""

    def __init__(
        self,
        seek_callback: Callable[[float], None],
        duration_ms: float = DEFAULT_DURATION_MS,
        clock: Callable[[], float] = time.perf_counter
    ) -> None:
        """Initialize the ticker.

        Args:
            seek_callback: Called with the new position in milliseconds
            duration_ms: Loop length in milliseconds
            clock: Returns the current time in seconds
        """
        super().__init__(duration_ms, clock)
        self._seek_callback = seek_callback

    def _advance(self, delta_ms: float) -> None:
        super()._advance(delta_ms)
        self._seek_callback(self._current_time)

    def seek(self, position_ms: float) -> None:
        super().seek(position_ms)
        self._seek_callback(self._current_time)
