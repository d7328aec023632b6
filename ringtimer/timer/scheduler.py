"""Clock and frame-scheduler adapters used by :class:`TimerEngine`.

The engine only needs two things from its host:

``clock.now()``
    Wall-clock seconds as a float.  Wall time (not monotonic) so that a
    laptop lid closed mid-countdown still counts toward elapsed time.
``scheduler.schedule_next_frame(callback, delay_ms)``
    Run *callback* once, later.  Returns a handle with ``cancel()``.
"""

from __future__ import annotations

import time
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, Qt, QTimer

FRAME_INTERVAL_MS = 16  # ~60 fps


class Clock(Protocol):
    def now(self) -> float: ...


class FrameHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_next_frame(
        self, callback: Callable[[], None], delay_ms: int = FRAME_INTERVAL_MS,
    ) -> FrameHandle: ...


class SystemClock:
    """Wall-clock time in seconds."""

    def now(self) -> float:
        return time.time()


class QtFrameHandle:
    """One pending single-shot ``QTimer``."""

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtFrameScheduler(QObject):
    """Schedules one-shot callbacks on the Qt event loop."""

    def schedule_next_frame(
        self, callback: Callable[[], None], delay_ms: int = FRAME_INTERVAL_MS,
    ) -> QtFrameHandle:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setInterval(max(0, int(delay_ms)))
        handle = QtFrameHandle(timer)

        def _fire() -> None:
            handle.cancel()
            callback()

        timer.timeout.connect(_fire)
        timer.start()
        return handle
