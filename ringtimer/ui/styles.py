"""QSS stylesheet and ring colours for RingTimer."""

from __future__ import annotations

from ..timer.engine import TimerState

# ── ring colours per state ───────────────────────────────────────────────

STATE_COLORS: dict[TimerState, str] = {
    TimerState.RUNNING:   "#89B4FA",   # blue
    TimerState.PAUSED:    "#6C7086",   # desaturated gray
    TimerState.COMPLETED: "#89B4FA",
    TimerState.IDLE:      "#4A4A5E",   # neutral dim
}

COMPLETE_FLASH_COLOR = "#4CAF50"

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "border":       "#313154",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 20px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
    }}

    QPushButton#primaryButton:disabled {{
        background-color: {p['surface']};
        color: {p['text_muted']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#adjustButton {{
        padding: 4px 14px;
        font-size: 16px;
    }}

    QPushButton#shortcutButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QLabel#unitValue {{
        font-size: 40px;
        font-weight: 700;
    }}

    QLabel#unitName {{
        color: {p['text_muted']};
        font-size: 11px;
        letter-spacing: 2px;
    }}
    """
