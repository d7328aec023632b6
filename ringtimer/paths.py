"""Per-platform locations for RingTimer's settings, database and caches."""

from __future__ import annotations

import os
import platform
from pathlib import Path


def app_support_dir() -> Path:
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "RingTimer"


APP_SUPPORT_DIR = app_support_dir()
LOGS_DIR = APP_SUPPORT_DIR / "logs"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
