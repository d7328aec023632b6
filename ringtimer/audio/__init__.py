"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, ALERT_PATTERN_MS

__all__ = ["SoundManager", "SOUND_NAMES", "ALERT_PATTERN_MS"]
