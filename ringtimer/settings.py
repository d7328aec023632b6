"""Application settings with JSON persistence.

Settings are stored at ``<app support>/RingTimer/settings.json``
(see :mod:`ringtimer.paths`).

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field, fields

from .logger import log
from .paths import APP_SUPPORT_DIR
from .timer.configuration import Configuration

SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


def _default_shortcuts() -> list[list[int]]:
    return [[0, 1, 0], [0, 5, 0], [0, 10, 0]]


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    shortcut_defaults: list[list[int]] = field(default_factory=_default_shortcuts)
    fine_refresh_ms: int = 16              # sub-minute redraw floor
    completion_flash_ms: int = 3000

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 620
    always_on_top: bool = False

    def default_shortcuts(self) -> list[Configuration]:
        """Shortcut fallbacks as Configurations, shortest first."""
        configs = []
        for raw in self.shortcut_defaults:
            try:
                hours, minutes, seconds = (int(v) for v in raw)
            except (TypeError, ValueError):
                continue
            configs.append(Configuration(hours, minutes, seconds))
        fallback = [Configuration(*raw) for raw in _default_shortcuts()]
        for config in fallback:
            if len(configs) >= len(fallback):
                break
            if config not in configs:
                configs.append(config)
        return sorted(configs, key=lambda c: c.total_seconds)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
