"""The countdown page.

Layout (top → bottom):
    - ProgressRing (large, centred)
    - Button row: Home, Pause/Resume, Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QSizePolicy,
)

from ..timer.engine import TimerEngine, TimerState, Snapshot
from ..timer.formatter import DisplayStrings, format_remaining
from .progress_ring import ProgressRing

STATE_LABELS: dict[TimerState, str] = {
    TimerState.IDLE:      "READY",
    TimerState.RUNNING:   "",
    TimerState.PAUSED:    "PAUSED",
    TimerState.COMPLETED: "DONE",
}

PAUSE_ICON = "⏸"
PLAY_ICON = "▶"


class TimerWidget(QWidget):
    """Ring plus controls, driven entirely by engine snapshots."""

    home_requested = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._last_display: DisplayStrings | None = None
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)
        self.apply_snapshot(engine.snapshot())

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 28)
        layout.setSpacing(16)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(300, 300)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._home_btn = QPushButton("Home", card)
        self._home_btn.setObjectName("secondaryButton")

        self._toggle_btn = QPushButton(PAUSE_ICON, card)
        self._toggle_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._home_btn)
        btn_row.addWidget(self._toggle_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._toggle_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._home_btn.clicked.connect(self.home_requested)

        self._engine.snapshot_ready.connect(self.apply_snapshot)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── public API ────────────────────────────────────────────────────────

    @property
    def ring(self) -> ProgressRing:
        return self._ring

    @property
    def toggle_text(self) -> str:
        return self._toggle_btn.text()

    @property
    def last_display(self) -> DisplayStrings | None:
        return self._last_display

    def apply_snapshot(self, snapshot: Snapshot) -> None:
        display = format_remaining(snapshot.remaining, snapshot.total)
        self._last_display = display
        self._ring.set_time_text(display.text)
        self._ring.set_ring_fraction(display.ring_fraction)

    def set_flashing(self, flashing: bool) -> None:
        self._ring.set_flashing(flashing)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        self._toggle_btn.setText(PAUSE_ICON if state == TimerState.RUNNING else PLAY_ICON)
        self._ring.set_state_label(STATE_LABELS.get(state, ""))
        self._ring.apply_state(state)
