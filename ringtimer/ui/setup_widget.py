"""The home page: pick hours/minutes/seconds and start.

Layout (top → bottom):
    - Three unit columns, each with +, value, −
    - Shortcut buttons (recent or default durations)
    - Start button (disabled while the total is zero)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.configuration import Configuration, UNIT_LIMITS
from ..timer.formatter import shortcut_label

UNIT_TITLES: dict[str, str] = {
    "hours": "HOURS",
    "minutes": "MIN",
    "seconds": "SEC",
}


class SetupWidget(QWidget):
    """Configuration card shown before a countdown starts."""

    start_requested = pyqtSignal(object)          # Configuration
    configuration_changed = pyqtSignal(object)    # Configuration

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._config = Configuration()
        self._shortcuts: list[Configuration] = []
        self._value_labels: dict[str, QLabel] = {}
        self._shortcut_buttons: list[QPushButton] = []
        self._build_ui()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 32, 32, 28)
        layout.setSpacing(16)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── unit pickers ─────────────────────────────────────────────
        units_row = QHBoxLayout()
        units_row.setSpacing(24)
        units_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        for unit in UNIT_LIMITS:
            units_row.addLayout(self._build_unit_column(card, unit))
        layout.addLayout(units_row)

        # ── shortcuts ────────────────────────────────────────────────
        shortcut_row = QHBoxLayout()
        shortcut_row.setSpacing(10)
        shortcut_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        for index in range(3):
            btn = QPushButton("", card)
            btn.setObjectName("shortcutButton")
            btn.clicked.connect(lambda _=False, i=index: self._on_shortcut(i))
            self._shortcut_buttons.append(btn)
            shortcut_row.addWidget(btn)
        layout.addLayout(shortcut_row)

        # ── start ────────────────────────────────────────────────────
        self._start_btn = QPushButton("Start", card)
        self._start_btn.setObjectName("primaryButton")
        self._start_btn.clicked.connect(self.request_start)
        layout.addWidget(self._start_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    def _build_unit_column(self, parent: QWidget, unit: str) -> QVBoxLayout:
        column = QVBoxLayout()
        column.setSpacing(6)
        column.setAlignment(Qt.AlignmentFlag.AlignCenter)

        up = QPushButton("+", parent)
        up.setObjectName("adjustButton")
        up.setAutoRepeat(True)
        up.clicked.connect(lambda: self.adjust(unit, 1))

        value = QLabel("00", parent)
        value.setObjectName("unitValue")
        value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._value_labels[unit] = value

        down = QPushButton("−", parent)
        down.setObjectName("adjustButton")
        down.setAutoRepeat(True)
        down.clicked.connect(lambda: self.adjust(unit, -1))

        title = QLabel(UNIT_TITLES[unit], parent)
        title.setObjectName("unitName")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        for widget in (up, value, down, title):
            column.addWidget(widget, alignment=Qt.AlignmentFlag.AlignCenter)
        return column

    # ── public API ────────────────────────────────────────────────────────

    @property
    def configuration(self) -> Configuration:
        return self._config

    @property
    def start_enabled(self) -> bool:
        return self._start_btn.isEnabled()

    @property
    def shortcuts(self) -> list[Configuration]:
        return list(self._shortcuts)

    def value_text(self, unit: str) -> str:
        return self._value_labels[unit].text()

    def set_configuration(self, config: Configuration) -> None:
        self._config = config
        self._refresh()
        self.configuration_changed.emit(config)

    def adjust(self, unit: str, delta: int) -> None:
        self.set_configuration(self._config.adjust(unit, delta))

    def set_shortcuts(self, shortcuts: list[Configuration]) -> None:
        self._shortcuts = list(shortcuts)
        for btn, config in zip(self._shortcut_buttons, self._shortcuts):
            btn.setText(shortcut_label(config))
            btn.setVisible(True)
        for btn in self._shortcut_buttons[len(self._shortcuts):]:
            btn.setVisible(False)

    def select_shortcut(self, config: Configuration) -> None:
        self.set_configuration(config)

    def request_start(self) -> None:
        # The button is disabled at zero; keyboard paths still land here.
        if not self._config.is_startable:
            return
        self.start_requested.emit(self._config)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_shortcut(self, index: int) -> None:
        if index < len(self._shortcuts):
            self.select_shortcut(self._shortcuts[index])

    def _refresh(self) -> None:
        for unit, label in self._value_labels.items():
            label.setText(f"{getattr(self._config, unit):02d}")
        self._start_btn.setEnabled(self._config.is_startable)
