"""Completion side effects: alert sound, tray message and ring flash."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .logger import log

COMPLETION_FLASH_MS = 3000


class CompletionNotifier(QObject):
    """Fires once per completed countdown.

    ``notify()`` plays the alert through *play_sound*, posts a desktop
    message through *show_message* when notifications are enabled, and
    keeps the completion flash up for ``flash_ms`` milliseconds.

    Signals
    -------
    flash_started()
    flash_finished()
    """

    flash_started = pyqtSignal()
    flash_finished = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        play_sound: Callable[[str], None] | None = None,
        show_message: Callable[[str, str], None] | None = None,
        flash_ms: int = COMPLETION_FLASH_MS,
    ) -> None:
        super().__init__(parent)
        self._play_sound = play_sound
        self._show_message = show_message
        self.notifications_enabled = True
        self._notify_count = 0

        self._flash_timer = QTimer(self)
        self._flash_timer.setSingleShot(True)
        self._flash_timer.setInterval(flash_ms)
        self._flash_timer.timeout.connect(self._end_flash)

    @property
    def flash_active(self) -> bool:
        return self._flash_timer.isActive()

    @property
    def notify_count(self) -> int:
        return self._notify_count

    def notify(self) -> None:
        self._notify_count += 1
        log.info("Countdown complete, notifying")
        if self._play_sound is not None:
            self._play_sound("complete")
        if self.notifications_enabled and self._show_message is not None:
            self._show_message("Time's up!", "Your countdown has finished.")
        # Restarting the timer extends an already-running flash.
        self._flash_timer.start()
        self.flash_started.emit()

    def cancel_flash(self) -> None:
        if self._flash_timer.isActive():
            self._flash_timer.stop()
            self.flash_finished.emit()

    def _end_flash(self) -> None:
        self.flash_finished.emit()
