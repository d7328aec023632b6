"""The user's hours/minutes/seconds selection."""

from __future__ import annotations

from dataclasses import dataclass, replace

# Upper bound per unit; lower bound is always 0.
UNIT_LIMITS: dict[str, int] = {
    "hours": 99,
    "minutes": 59,
    "seconds": 59,
}


def _clamp(value: int, upper: int) -> int:
    return max(0, min(upper, int(value)))


@dataclass(frozen=True)
class Configuration:
    """A countdown length, clamped to ``0..99 h``, ``0..59 m``, ``0..59 s``.

    Instances are immutable; :meth:`adjust` returns a new, re-clamped
    value so the ranges hold after every mutation.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        for unit, upper in UNIT_LIMITS.items():
            object.__setattr__(self, unit, _clamp(getattr(self, unit), upper))

    @classmethod
    def from_seconds(cls, total: int) -> Configuration:
        total = max(0, int(total))
        hours, rest = divmod(total, 3600)
        minutes, seconds = divmod(rest, 60)
        return cls(hours, minutes, seconds)

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    @property
    def is_startable(self) -> bool:
        return self.total_seconds > 0

    def adjust(self, unit: str, delta: int) -> Configuration:
        """Return a copy with *unit* moved by *delta*, clamped."""
        if unit not in UNIT_LIMITS:
            raise ValueError(f"unknown unit {unit!r}")
        return replace(self, **{unit: getattr(self, unit) + delta})
