"""Playback driver: turns the curve into a playback rate once per frame."""

import logging
import math

from curve_model import CurveModel
from custom_types import TimeSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPEED = 6.0


def speed_from_bias(y: float, max_speed: float = DEFAULT_MAX_SPEED) -> float:
    """Map a speed bias to a playback rate multiplier.

    y = 0 plays at 1x, y = 1 at (max_speed + 1)x and y = -1 at
    1 / (max_speed + 1)x.
    """
    if y >= 0:
        return y * max_speed + 1
    return 1 / (-y * max_speed + 1)


class PlaybackDriver:
    """Reads playback time, evaluates the curve, writes the playback rate.

    Upward on the canvas is faster: the canvas y axis points down, so the
    curve value is negated before it becomes a speed.
    """

    def __init__(
        self,
        model: CurveModel,
        time_source: TimeSource,
        max_speed: float = DEFAULT_MAX_SPEED,
        enforce_trim: bool = True
    ) -> None:
        """Initialize the playback driver.

        Args:
            model: Curve to evaluate
            time_source: Clock and rate control of the media
            max_speed: Speed gained at full bias
            enforce_trim: Seek back to the window start when playback leaves
                the trimmed window
        """
        self.model = model
        self.time_source = time_source
        self.max_speed = float(max_speed)
        self.enforce_trim = enforce_trim
        self.last_time: float | None = None
        self.last_speed: float | None = None

        logger.debug("PlaybackDriver initialized with max_speed: %s", self.max_speed)

    def normalized_time(self) -> float | None:
        """Current playback position as a fraction of the duration."""
        duration = self.time_source.duration
        if not duration or not math.isfinite(duration) or duration <= 0:
            return None
        return self.time_source.current_time / duration

    def tick(self) -> float | None:
        """Run one frame of playback control.

        Returns:
            The playback rate written to the time source, or None when the
            tick was skipped (no media, time outside the curve, trim seek)
        """
        t = self.normalized_time()
        if t is None:
            return None
        self.last_time = t

        if self.enforce_trim and self.model.is_trimmed:
            start, end = self.model.active_window
            if t < start or t > end:
                logger.debug("Time %.3f outside trim window [%.3f, %.3f], seeking", t, start, end)
                self.time_source.seek(start * self.time_source.duration)
                return None

        value = self.model.evaluate(t)
        if value is None:
            return None

        speed = speed_from_bias(-value, self.max_speed)
        if not math.isfinite(speed):
            return None

        self.time_source.set_playback_rate(speed)
        self.last_speed = speed
        return speed
