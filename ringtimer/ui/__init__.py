"""UI package."""

from .timer_widget import TimerWidget
from .setup_widget import SetupWidget
from .progress_ring import ProgressRing

__all__ = [
    "TimerWidget",
    "SetupWidget",
    "ProgressRing",
]
