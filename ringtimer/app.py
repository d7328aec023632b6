"""Main application window for RingTimer."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QMainWindow, QStackedWidget, QStatusBar, QSystemTrayIcon,
)

from .audio.sounds import SoundManager
from .history import ConfigurationStore, KeyValueStore
from .logger import log
from .notifier import CompletionNotifier
from .settings import Settings, load_settings, save_settings
from .timer.configuration import Configuration
from .timer.engine import TimerEngine, TimerState
from .timer.formatter import format_clock, format_configuration
from .ui.setup_widget import SetupWidget
from .ui.styles import PALETTE, build_stylesheet
from .ui.timer_widget import TimerWidget

STATUS_MESSAGES: dict[TimerState, str] = {
    TimerState.IDLE:      "Set a duration to begin",
    TimerState.RUNNING:   "Counting down...",
    TimerState.PAUSED:    "Paused",
    TimerState.COMPLETED: "Time's up!",
}


def make_app_icon() -> QIcon:
    """A plain accent-coloured ring, used for the dock and the tray."""
    pixmap = QPixmap(64, 64)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    pen = p.pen()
    pen.setColor(QColor(PALETTE["accent"]))
    pen.setWidth(8)
    p.setPen(pen)
    p.drawEllipse(8, 8, 48, 48)
    p.end()
    return QIcon(pixmap)


class RingTimerApp(QMainWindow):
    """Setup page and countdown page in one stacked window."""

    SETUP_PAGE = 0
    TIMER_PAGE = 1

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        store: KeyValueStore | None = None,
        sound_manager: SoundManager | None = None,
        engine: TimerEngine | None = None,
        use_sounds: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("RingTimer")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── collaborators ─────────────────────────────────────────────
        if store is None:
            from .database.store import SqlKeyValueStore
            store = SqlKeyValueStore()
        self._history = ConfigurationStore(store)
        self._engine = engine or TimerEngine(
            self, fine_interval=self._settings.fine_refresh_ms / 1000,
        )

        if sound_manager is None and use_sounds:
            sound_manager = SoundManager(self)
        self._sound_manager = sound_manager
        if self._sound_manager is not None:
            self._sound_manager.set_enabled(self._settings.sound_enabled)
            self._sound_manager.set_volume(self._settings.sound_volume)

        self._tray_icon = QSystemTrayIcon(make_app_icon(), self)
        self._tray_icon.setToolTip("RingTimer")
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        self._notifier = CompletionNotifier(
            self,
            play_sound=self._play_sound,
            show_message=self._send_notification,
            flash_ms=self._settings.completion_flash_ms,
        )
        self._notifier.notifications_enabled = self._settings.notifications_enabled

        # ── pages ─────────────────────────────────────────────────────
        self._stack = QStackedWidget(self)
        self._setup_widget = SetupWidget(self._stack)
        self._timer_widget = TimerWidget(self._engine, self._stack)
        self._stack.addWidget(self._setup_widget)
        self._stack.addWidget(self._timer_widget)
        self.setCentralWidget(self._stack)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self.setStyleSheet(build_stylesheet())

        self._connect_signals()

        recent = self._history.most_recent()
        if recent is not None:
            self._setup_widget.set_configuration(recent)
        self._refresh_shortcuts()
        self._on_state_changed(self._engine.state)
        self._apply_always_on_top(self._settings.always_on_top)

    # ── wiring ────────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._setup_widget.start_requested.connect(self.start_countdown)
        self._timer_widget.home_requested.connect(self.go_home)
        self._setup_widget.configuration_changed.connect(
            self._on_configuration_changed
        )

        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.snapshot_ready.connect(self._on_snapshot)
        self._engine.completed.connect(self._notifier.notify)

        self._notifier.flash_started.connect(
            lambda: self._timer_widget.set_flashing(True)
        )
        self._notifier.flash_finished.connect(
            lambda: self._timer_widget.set_flashing(False)
        )

    # ── public API ────────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def history(self) -> ConfigurationStore:
        return self._history

    @property
    def notifier(self) -> CompletionNotifier:
        return self._notifier

    @property
    def setup_widget(self) -> SetupWidget:
        return self._setup_widget

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def current_page(self) -> int:
        return self._stack.currentIndex()

    def start_countdown(self, config: Configuration) -> bool:
        """Remember *config* and switch to the countdown page."""
        if not config.is_startable:
            return False
        self._history.save(config)
        if not self._engine.start(config):
            return False
        self._notifier.cancel_flash()
        self._play_sound("start")
        self._stack.setCurrentIndex(self.TIMER_PAGE)
        return True

    def go_home(self) -> None:
        self._engine.stop()
        self._notifier.cancel_flash()
        self._refresh_shortcuts()
        self._stack.setCurrentIndex(self.SETUP_PAGE)

    # ── side effects ──────────────────────────────────────────────────────

    def _play_sound(self, name: str) -> None:
        if self._sound_manager is not None:
            self._sound_manager.play(name)

    def _send_notification(self, title: str, body: str) -> None:
        if self._tray_icon.isVisible():
            self._tray_icon.showMessage(title, body)

    def _refresh_shortcuts(self) -> None:
        shortcuts = self._history.shortcuts(self._settings.default_shortcuts())
        self._setup_widget.set_shortcuts(shortcuts)

    def _apply_always_on_top(self, on_top: bool) -> None:
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, on_top)

    # ── engine slots ──────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        if state == TimerState.IDLE:
            self._tray_icon.setToolTip("RingTimer")
            self._on_configuration_changed(self._setup_widget.configuration)
            return
        self._status_bar.showMessage(STATUS_MESSAGES.get(state, ""))

    def _on_configuration_changed(self, config: Configuration) -> None:
        if self._engine.state != TimerState.IDLE:
            return
        if config.is_startable:
            self._status_bar.showMessage(f"Ready: {format_configuration(config)}")
        else:
            self._status_bar.showMessage(STATUS_MESSAGES[TimerState.IDLE])

    def _on_snapshot(self, snapshot) -> None:
        self._tray_icon.setToolTip(
            f"RingTimer — {format_clock(int(snapshot.remaining))}"
        )

    # ── keyboard ──────────────────────────────────────────────────────────

    def _on_space(self) -> None:
        if self._stack.currentIndex() == self.SETUP_PAGE:
            self._setup_widget.request_start()
        else:
            self._engine.toggle()

    def _on_escape(self) -> None:
        if self._stack.currentIndex() == self.TIMER_PAGE:
            self.go_home()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space starts or toggles; Escape goes back home."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._engine.stop()
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            log.warning("Could not save settings: %s", exc)
        self._tray_icon.hide()
        event.accept()
