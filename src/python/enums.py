"""
Enumerations for SlowFast using Python 3.11+ StrEnum.

This module defines string-based enumerations for the values that travel
between config, the edit session and the UI.
"""

from enum import StrEnum


class EasingKind(StrEnum):
    """Easing functions applied inside a curve segment.

    Attributes:
        QUADRATIC_IN_OUT: Quadratic ease in/out (default)
        BEZIER_IN_OUT: Cubic bezier ease in/out (0.42, 0, 0.58, 1)
        IDENTITY: Linear interpolation
    """
    QUADRATIC_IN_OUT = "quadratic-in-out"
    BEZIER_IN_OUT = "bezier-in-out"
    IDENTITY = "identity"


class GestureKind(StrEnum):
    """Normalized pointer gestures delivered to the edit session."""
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    REMOVE = "remove"


class EditState(StrEnum):
    """States of the point editing state machine."""
    IDLE = "idle"
    DRAGGING = "dragging"


class EditAction(StrEnum):
    """Outcome of a single pointer gesture.

    Attributes:
        NONE: Nothing changed (miss, rejected mutation)
        DRAG_STARTED: A handle was grabbed
        MOVED: The dragged point moved
        INSERTED: A new point was inserted
        REMOVED: A point was removed
        RELEASED: A drag ended
    """
    NONE = "none"
    DRAG_STARTED = "drag-started"
    MOVED = "moved"
    INSERTED = "inserted"
    REMOVED = "removed"
    RELEASED = "released"


class TimeSourceKind(StrEnum):
    """Where playback time comes from.

    Attributes:
        VIDEO: Media player position, playback rate applied to the player
        SIMULATED: Free running clock, no media
        SCRUBBING: Free running clock that seeks a paused media player
    """
    VIDEO = "video"
    SIMULATED = "simulated"
    SCRUBBING = "scrubbing"
