"""Timer package."""

from .configuration import Configuration, UNIT_LIMITS
from .engine import (
    TimerEngine,
    TimerState,
    Snapshot,
    SUB_MINUTE_THRESHOLD,
    FINE_REFRESH_INTERVAL,
)
from .formatter import DisplayStrings, format_remaining, format_clock
from .scheduler import SystemClock, QtFrameScheduler, FRAME_INTERVAL_MS

__all__ = [
    "Configuration",
    "UNIT_LIMITS",
    "TimerEngine",
    "TimerState",
    "Snapshot",
    "SUB_MINUTE_THRESHOLD",
    "FINE_REFRESH_INTERVAL",
    "DisplayStrings",
    "format_remaining",
    "format_clock",
    "SystemClock",
    "QtFrameScheduler",
    "FRAME_INTERVAL_MS",
]
