"""Pure display formatting for remaining time.

Nothing here has side effects, so the ring and readout can call
:func:`format_remaining` at frame rate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .configuration import Configuration


@dataclass(frozen=True)
class DisplayStrings:
    """Everything the readout and ring need for one frame.

    ``text`` is the shortest sufficient form (``H:MM:SS``, ``M:SS`` or
    ``S.T``); ``clock`` always keeps the minutes field (``0:45``).
    """

    text: str
    clock: str
    tenths: int
    percentage: int
    ring_fraction: float


def split_seconds(whole_seconds: int) -> tuple[int, int, int]:
    hours, rest = divmod(max(0, whole_seconds), 3600)
    minutes, seconds = divmod(rest, 60)
    return hours, minutes, seconds


def format_clock(whole_seconds: int) -> str:
    """``H:MM:SS`` when there are hours, ``M:SS`` otherwise."""
    hours, minutes, seconds = split_seconds(whole_seconds)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def tenths_digit(remaining: float) -> int:
    # Float error near a whole second can push this to 10.
    digit = math.floor((remaining - math.floor(remaining)) * 10)
    return max(0, min(9, digit))


def fraction_elapsed(remaining: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - remaining / total))


def format_remaining(remaining: float, total: float) -> DisplayStrings:
    remaining = max(0.0, float(remaining))
    whole = int(remaining)
    hours, minutes, seconds = split_seconds(whole)
    tenths = tenths_digit(remaining)

    if hours > 0 or minutes > 0:
        text = format_clock(whole)
    else:
        text = f"{seconds}.{tenths}"

    fraction = fraction_elapsed(remaining, total)
    percentage = int(math.floor(fraction * 100 + 0.5)) if total > 0 else 0

    return DisplayStrings(
        text=text,
        clock=format_clock(whole),
        tenths=tenths,
        percentage=percentage,
        ring_fraction=fraction,
    )


def format_configuration(config: Configuration) -> str:
    """Zero-padded ``HH:MM:SS`` for the setup page."""
    return f"{config.hours:02d}:{config.minutes:02d}:{config.seconds:02d}"


def shortcut_label(config: Configuration) -> str:
    """Compact button label such as ``5m``, ``1h 30m`` or ``45s``."""
    parts = []
    if config.hours:
        parts.append(f"{config.hours}h")
    if config.minutes:
        parts.append(f"{config.minutes}m")
    if config.seconds or not parts:
        parts.append(f"{config.seconds}s")
    return " ".join(parts)
