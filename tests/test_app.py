"""Tests for the completion notifier, the two pages and the main window."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QTest

from ringtimer.app import RingTimerApp
from ringtimer.database.store import MemoryKeyValueStore
from ringtimer.history import ConfigurationStore
from ringtimer.notifier import CompletionNotifier
from ringtimer.settings import Settings
from ringtimer.timer.configuration import Configuration
from ringtimer.timer.engine import TimerEngine, TimerState
from ringtimer.ui.setup_widget import SetupWidget
from ringtimer.ui.timer_widget import TimerWidget, PAUSE_ICON, PLAY_ICON

from helpers import SignalCollector


# ═══════════════════════════════════════════════════════════════════════
#  NOTIFIER
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestCompletionNotifier:
    def _make(self, **kwargs):
        sounds, messages = [], []
        notifier = CompletionNotifier(
            play_sound=sounds.append,
            show_message=lambda title, body: messages.append(title),
            **kwargs,
        )
        return notifier, sounds, messages

    def test_notify_plays_alert_and_messages(self):
        notifier, sounds, messages = self._make()
        notifier.notify()
        assert sounds == ["complete"]
        assert len(messages) == 1
        assert notifier.notify_count == 1

    def test_flash_starts_and_can_be_cancelled(self):
        notifier, _, _ = self._make()
        started, finished = SignalCollector(), SignalCollector()
        notifier.flash_started.connect(started)
        notifier.flash_finished.connect(finished)

        notifier.notify()
        assert notifier.flash_active
        assert len(started) == 1

        notifier.cancel_flash()
        assert not notifier.flash_active
        assert len(finished) == 1

    def test_flash_ends_by_itself(self):
        notifier, _, _ = self._make(flash_ms=10)
        finished = SignalCollector()
        notifier.flash_finished.connect(finished)
        notifier.notify()
        QTest.qWait(100)
        assert not notifier.flash_active
        assert len(finished) == 1

    def test_notifications_disabled(self):
        notifier, sounds, messages = self._make()
        notifier.notifications_enabled = False
        notifier.notify()
        assert sounds == ["complete"]
        assert messages == []


# ═══════════════════════════════════════════════════════════════════════
#  SETUP PAGE
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSetupWidget:
    def test_start_disabled_at_zero(self):
        w = SetupWidget()
        assert not w.start_enabled

    def test_adjust_updates_labels_and_enables_start(self):
        w = SetupWidget()
        w.adjust("minutes", 1)
        assert w.value_text("minutes") == "01"
        assert w.start_enabled

    def test_adjust_emits_configuration_changed(self):
        w = SetupWidget()
        c = SignalCollector()
        w.configuration_changed.connect(c)
        w.adjust("seconds", 15)
        assert c.last == Configuration(0, 0, 15)

    def test_adjust_clamps(self):
        w = SetupWidget()
        w.adjust("seconds", -1)
        assert w.configuration.seconds == 0
        w.adjust("hours", 500)
        assert w.value_text("hours") == "99"

    def test_request_start_emits_configuration(self):
        w = SetupWidget()
        c = SignalCollector()
        w.start_requested.connect(c)
        w.request_start()
        assert len(c) == 0

        w.set_configuration(Configuration(0, 2, 0))
        w.request_start()
        assert c.last == Configuration(0, 2, 0)

    def test_select_shortcut(self):
        w = SetupWidget()
        w.set_shortcuts([Configuration(0, 1, 0), Configuration(0, 5, 0), Configuration(0, 10, 0)])
        w._on_shortcut(1)
        assert w.configuration == Configuration(0, 5, 0)


# ═══════════════════════════════════════════════════════════════════════
#  TIMER PAGE
# ═══════════════════════════════════════════════════════════════════════


class TestTimerWidget:
    def test_snapshots_drive_ring(self, engine, clock):
        w = TimerWidget(engine)
        engine.start(Configuration(0, 1, 30))
        assert w.ring.time_text == "1:30"
        clock.advance(45)
        engine.tick()
        assert w.ring.time_text == "45.0"
        assert w.ring.ring_fraction == pytest.approx(0.5)

    def test_toggle_icon_follows_state(self, engine):
        w = TimerWidget(engine)
        engine.start(Configuration(0, 0, 30))
        assert w.toggle_text == PAUSE_ICON
        engine.pause()
        assert w.toggle_text == PLAY_ICON

    def test_flashing(self, engine):
        w = TimerWidget(engine)
        w.set_flashing(True)
        assert w.ring.flashing


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def window(qapp, clock, scheduler):
    engine = TimerEngine(clock=clock, scheduler=scheduler)
    return RingTimerApp(
        settings=Settings(),
        store=MemoryKeyValueStore(),
        engine=engine,
        use_sounds=False,
    )


class TestRingTimerApp:
    def test_starts_on_setup_page(self, window):
        assert window.current_page == RingTimerApp.SETUP_PAGE
        assert window.engine.state == TimerState.IDLE
        assert window.setup_widget.shortcuts == Settings().default_shortcuts()

    def test_status_bar_follows_setup_configuration(self, window):
        assert window.statusBar().currentMessage() == "Set a duration to begin"
        window.setup_widget.adjust("minutes", 5)
        assert window.statusBar().currentMessage() == "Ready: 00:05:00"
        window.setup_widget.adjust("minutes", -5)
        assert window.statusBar().currentMessage() == "Set a duration to begin"

    def test_status_bar_shows_configuration_after_going_home(self, window):
        window.setup_widget.set_configuration(Configuration(1, 0, 30))
        window.setup_widget.request_start()
        assert window.statusBar().currentMessage() == "Counting down..."
        window.go_home()
        assert window.statusBar().currentMessage() == "Ready: 01:00:30"

    def test_start_saves_history_and_switches_page(self, window):
        assert window.start_countdown(Configuration(0, 3, 0)) is True
        assert window.current_page == RingTimerApp.TIMER_PAGE
        assert window.engine.is_running
        assert window.history.most_recent() == Configuration(0, 3, 0)

    def test_zero_start_is_refused(self, window):
        assert window.start_countdown(Configuration()) is False
        assert window.current_page == RingTimerApp.SETUP_PAGE
        assert window.history.entries() == []

    def test_completion_notifies_once_and_flashes(self, window, clock):
        window.start_countdown(Configuration(0, 0, 10))
        clock.advance(10)
        window.engine.tick()
        clock.advance(1)
        window.engine.tick()
        assert window.notifier.notify_count == 1
        assert window.timer_widget.ring.flashing

    def test_go_home_stops_and_refreshes_shortcuts(self, window):
        window.start_countdown(Configuration(0, 20, 0))
        window.start_countdown(Configuration(0, 2, 0))
        window.go_home()
        assert window.engine.state == TimerState.IDLE
        assert window.current_page == RingTimerApp.SETUP_PAGE
        assert Configuration(0, 20, 0) in window.setup_widget.shortcuts

    def test_space_starts_then_toggles(self, window):
        window.setup_widget.set_configuration(Configuration(0, 1, 0))
        window._on_space()
        assert window.engine.is_running
        window._on_space()
        assert window.engine.state == TimerState.PAUSED

    def test_escape_goes_home(self, window):
        window.start_countdown(Configuration(0, 1, 0))
        window._on_escape()
        assert window.current_page == RingTimerApp.SETUP_PAGE

    def test_restores_most_recent_configuration(self, qapp, clock, scheduler):
        store = MemoryKeyValueStore()
        ConfigurationStore(store, clock=clock).save(Configuration(0, 7, 30))
        window = RingTimerApp(
            settings=Settings(),
            store=store,
            engine=TimerEngine(clock=clock, scheduler=scheduler),
            use_sounds=False,
        )
        assert window.setup_widget.configuration == Configuration(0, 7, 30)
