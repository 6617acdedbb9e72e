"""
Type definitions for SlowFast.

This module defines common types, aliases, and TypedDict structures
used throughout the SlowFast codebase.
"""

from typing import Protocol, TypedDict

import numpy as np
import numpy.typing as npt

# NumPy array type aliases
SampleArray = npt.NDArray[np.float64]  # Evaluated curve samples

# Coordinate aliases
ScreenPoint = tuple[float, float]       # Pixel space, origin top-left
NormalizedPoint = tuple[float, float]   # x in [0, 1], y in [-1, 1]


class TimeSource(Protocol):
    """Playback clock consumed by the playback driver.

    Times are in milliseconds.
    """

    @property
    def current_time(self) -> float: ...

    @property
    def duration(self) -> float: ...

    def set_playback_rate(self, speed: float) -> None: ...

    def seek(self, position_ms: float) -> None: ...


# Configuration TypedDict definitions
class CanvasConfig(TypedDict, total=False):
    """Canvas geometry and drawing configuration."""
    width: int
    height: int
    handleRadius: float
    ghostRadius: float
    labelSpacer: int
    curveSamples: int
    curveWidth: float
    midLineWidth: float


class GestureConfig(TypedDict, total=False):
    """Pointer gesture tuning."""
    longPressMs: int
    longPressSlop: float


class CurveConfig(TypedDict, total=False):
    """Curve model configuration."""
    easing: str
    minPointGap: float
    defaultPoints: list[list[float]]


class PlaybackConfig(TypedDict, total=False):
    """Playback configuration."""
    maxSpeed: float
    timeSource: str
    simulatedDurationMs: float
    enforceTrim: bool
    videoPath: str
