"""Countdown state machine for RingTimer.

States
------
IDLE        Nothing configured or the user went back home.
RUNNING     Counting down.
PAUSED      Frozen; also the "ready" state after a reset.
COMPLETED   Reached zero.  Toggling restarts the same duration.

Transitions
-----------
IDLE → RUNNING                 (start)
RUNNING → PAUSED               (pause)
PAUSED → RUNNING               (resume)
RUNNING → COMPLETED            (tick reaches 0)
COMPLETED → RUNNING            (resume_from_completed)
Any → PAUSED                   (reset)
Any → IDLE                     (stop)

Timekeeping
-----------
Remaining time is never decremented per callback.  While running it is
always ``total - (now - anchor)``; pausing records the pause instant and
resuming shifts the anchor forward by the pause gap.  Frames may arrive
late, coalesced or not at all (e.g. a hidden window) and the readout is
still correct on the next one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..logger import log
from .configuration import Configuration
from .formatter import fraction_elapsed
from .scheduler import (
    Clock, FrameHandle, QtFrameScheduler, Scheduler, SystemClock,
)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


# ── constants ─────────────────────────────────────────────────────────────

SUB_MINUTE_THRESHOLD = 60.0     # below this the readout shows tenths
FINE_REFRESH_INTERVAL = 0.016   # seconds between sub-minute publishes


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Snapshot:
    """Immutable read of the engine at one instant."""

    state: TimerState
    remaining: float
    total: float
    fraction_elapsed: float

    @property
    def is_running(self) -> bool:
        return self.state == TimerState.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.state == TimerState.COMPLETED


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Wall-clock anchored countdown with pause/resume/reset.

    Signals
    -------
    snapshot_ready(snapshot: Snapshot)
        Emitted whenever the display should be redrawn.  While at least a
        minute remains that is once per whole second; in the final minute
        it is at most every ``fine_interval`` seconds.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    completed()
        Emitted exactly once each time a countdown reaches zero.
    """

    snapshot_ready = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        fine_interval: float = FINE_REFRESH_INTERVAL,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._clock: Clock = clock or SystemClock()
        self._scheduler: Scheduler = (
            scheduler if scheduler is not None else QtFrameScheduler(self)
        )
        self._fine_interval: float = fine_interval
        self._frame_ms: int = max(1, round(fine_interval * 1000))

        # ── countdown state ───────────────────────────────────────────
        self._state: TimerState = TimerState.IDLE
        self._total: float = 0.0
        self._remaining: float = 0.0
        self._anchor: float | None = None
        self._paused_at: float | None = None

        # ── scheduling ────────────────────────────────────────────────
        self._pending: FrameHandle | None = None
        self._generation: int = 0

        # ── refresh throttling ────────────────────────────────────────
        self._last_published_at: float | None = None
        self._last_published_whole: int | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> float:
        """Seconds left as of the last tick or transition."""
        return self._remaining

    @property
    def total_duration(self) -> float:
        return self._total

    @property
    def anchor_timestamp(self) -> float | None:
        return self._anchor

    @property
    def paused_at_timestamp(self) -> float | None:
        return self._paused_at

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_complete(self) -> bool:
        return self._state == TimerState.COMPLETED

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    def snapshot(self, now: float | None = None) -> Snapshot:
        """Read the engine without mutating it."""
        remaining = self._remaining
        if self._state == TimerState.RUNNING:
            remaining = self._remaining_at(self._now(now))
        return self._make_snapshot(remaining)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, configuration: Configuration) -> bool:
        """Begin counting down *configuration*.

        Returns ``False`` (and does nothing) for a zero-length
        configuration.  Starting while running or paused restarts.
        """
        total = configuration.total_seconds
        if total <= 0:
            log.debug("Refusing to start a zero-length countdown")
            return False
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            log.debug("Restarting countdown that was %s", self._state.value)

        self._cancel_pending()
        now = self._clock.now()
        self._total = float(total)
        self._remaining = float(total)
        self._anchor = now
        self._paused_at = None
        self._clear_publish_marks()

        log.info("Countdown started for %d s", total)
        self._set_state(TimerState.RUNNING)
        self._publish(now)
        self._schedule_next()
        return True

    def tick(self, now: float | None = None) -> Snapshot | None:
        """Recompute remaining time from the anchor.

        A no-op returning ``None`` unless running, so a frame delivered
        after pause/stop does nothing.
        """
        if self._state != TimerState.RUNNING:
            return None
        now = self._now(now)
        remaining = self._remaining_at(now)

        if remaining <= 0:
            self._remaining = 0.0
            self._cancel_pending()
            self._set_state(TimerState.COMPLETED)
            snapshot = self._publish(now)
            log.info("Countdown of %d s completed", self._total)
            self.completed.emit()
            return snapshot

        self._remaining = remaining
        if self._should_publish(now, remaining):
            snapshot = self._publish(now)
        else:
            snapshot = self._make_snapshot(remaining)
        self._schedule_next()
        return snapshot

    def pause(self) -> bool:
        if self._state != TimerState.RUNNING:
            log.debug("Ignoring pause while %s", self._state.value)
            return False
        now = self._clock.now()
        remaining = self._remaining_at(now)
        if remaining <= 0:
            # Ran out before the next frame; finish instead of pausing at zero.
            self.tick(now)
            return False
        self._cancel_pending()
        self._remaining = remaining
        self._paused_at = now
        self._set_state(TimerState.PAUSED)
        self._publish(now)
        return True

    def resume(self) -> bool:
        """Continue after a pause; the pause gap never counts as elapsed."""
        if self._state != TimerState.PAUSED or self._paused_at is None:
            log.debug("Ignoring resume while %s", self._state.value)
            return False
        now = self._clock.now()
        self._anchor += max(0.0, now - self._paused_at)
        self._paused_at = None
        self._set_state(TimerState.RUNNING)
        self._publish(now)
        self._schedule_next()
        return True

    def resume_from_completed(self) -> bool:
        """Run the same duration again after it finished."""
        if self._state != TimerState.COMPLETED:
            return False
        now = self._clock.now()
        self._remaining = self._total
        self._anchor = now
        self._paused_at = None
        self._clear_publish_marks()
        log.info("Countdown of %d s restarted", self._total)
        self._set_state(TimerState.RUNNING)
        self._publish(now)
        self._schedule_next()
        return True

    def toggle(self) -> bool:
        """Single pause/resume button: pause, resume or restart."""
        if self._state == TimerState.COMPLETED:
            return self.resume_from_completed()
        if self._state == TimerState.RUNNING:
            return self.pause()
        if self._state == TimerState.PAUSED:
            return self.resume()
        return False

    def reset(self) -> bool:
        """Rewind to the full duration, ready but not running.

        Anchor and pause instant are set equal so a following
        :meth:`resume` applies a zero gap.
        """
        if self._total <= 0:
            return False
        self._cancel_pending()
        now = self._clock.now()
        self._remaining = self._total
        self._anchor = now
        self._paused_at = now
        self._clear_publish_marks()
        self._set_state(TimerState.PAUSED)
        self._publish(now)
        return True

    def stop(self) -> bool:
        """Cancel scheduling and go idle, leaving ``remaining`` as is."""
        self._cancel_pending()
        if self._state == TimerState.IDLE:
            return False
        self._paused_at = None
        self._set_state(TimerState.IDLE)
        return True

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timekeeping
    # ══════════════════════════════════════════════════════════════════

    def _now(self, now: float | None) -> float:
        return self._clock.now() if now is None else now

    def _remaining_at(self, now: float) -> float:
        if self._anchor is None:
            return self._remaining
        computed = max(0.0, self._total - (now - self._anchor))
        # A wall clock stepping backwards must not make the readout rise.
        return min(computed, self._remaining)

    def _make_snapshot(self, remaining: float) -> Snapshot:
        return Snapshot(
            state=self._state,
            remaining=remaining,
            total=self._total,
            fraction_elapsed=fraction_elapsed(remaining, self._total),
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — refresh policy
    # ══════════════════════════════════════════════════════════════════

    def _should_publish(self, now: float, remaining: float) -> bool:
        if self._last_published_at is None:
            return True
        if remaining < SUB_MINUTE_THRESHOLD:
            return now - self._last_published_at >= self._fine_interval
        return int(remaining) != self._last_published_whole

    def _next_delay_ms(self, remaining: float) -> int:
        if remaining < SUB_MINUTE_THRESHOLD:
            return self._frame_ms
        # Wake when the whole-second value is due to change.
        until_next = remaining - math.floor(remaining)
        return max(self._frame_ms, math.ceil(until_next * 1000))

    def _publish(self, now: float) -> Snapshot:
        snapshot = self._make_snapshot(self._remaining)
        self._last_published_at = now
        self._last_published_whole = int(self._remaining)
        self.snapshot_ready.emit(snapshot)
        return snapshot

    def _clear_publish_marks(self) -> None:
        self._last_published_at = None
        self._last_published_whole = None

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — scheduling
    # ══════════════════════════════════════════════════════════════════

    def _schedule_next(self) -> None:
        """Request exactly one future frame."""
        self._cancel_pending()
        generation = self._generation

        def _on_frame() -> None:
            if generation != self._generation:
                return
            self._pending = None
            self.tick()

        self._pending = self._scheduler.schedule_next_frame(
            _on_frame, self._next_delay_ms(self._remaining),
        )

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
