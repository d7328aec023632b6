"""Sound synthesis and playback using numpy + QSoundEffect.

Sounds are generated as WAV files from sine waves shaped by ADSR
envelopes and cached to disk, so only the first launch pays for
synthesis.

Sound names
-----------
- ``start``     — short rising two-note chime
- ``complete``  — three beeps following :data:`ALERT_PATTERN_MS`
- ``click``     — subtle button click
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..logger import log
from ..paths import SOUNDS_DIR

SOUND_NAMES = ("start", "complete", "click")

SAMPLE_RATE = 44100

# on, off, on, off, on — the haptic pattern phones buzz on completion
ALERT_PATTERN_MS = (200, 100, 200, 100, 200)
ALERT_FREQ = 880.0


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Mono 16-bit PCM WAV from float samples in -1..1."""
    int_samples = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_start() -> bytes:
    """Countdown start — E5 then A5, quick and light."""
    parts: list[np.ndarray] = []
    for freq in (659.25, 880.0):
        tone = _sine(freq, 0.09) * 0.5
        env = _make_envelope(len(tone), attack=80, decay=200, sustain_level=0.4, release=300)
        parts.append(tone * env)
        parts.append(_silence(0.02))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_alert() -> bytes:
    """Completion — beeps on the even slots of ALERT_PATTERN_MS."""
    parts: list[np.ndarray] = []
    for i, ms in enumerate(ALERT_PATTERN_MS):
        duration = ms / 1000
        if i % 2 == 0:
            tone = _sine(ALERT_FREQ, duration) * 0.55 + _sine(ALERT_FREQ * 2, duration) * 0.1
            env = _make_envelope(len(tone), attack=60, decay=400, sustain_level=0.6, release=600)
            parts.append(tone * env)
        else:
            parts.append(_silence(duration))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click — a very short high tick."""
    duration = 0.015
    n_samples = int(SAMPLE_RATE * duration)
    tick = _sine(1200.0, duration) * 0.2
    env = _make_envelope(n_samples, attack=20, decay=50, sustain_level=0.0, release=n_samples - 70)
    # Trailing silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick * env, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "start": _generate_start,
    "complete": _generate_alert,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesizes, caches and plays the app's sounds.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("complete")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                log.debug("Synthesized %s", path)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
