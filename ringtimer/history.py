"""Recently started configurations and the quick-select shortcuts.

History is a JSON list stored under one key of a string key-value store
(see :mod:`ringtimer.database.store`), newest first::

    [{"hours": 0, "minutes": 5, "seconds": 0, "timestamp": 1760000000000}, ...]

Storage problems never reach the caller.  Anything unreadable is treated
as empty history and failed writes are logged and dropped; the worst
case is a timer that does not remember what it ran last.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Protocol

from .logger import log
from .timer.configuration import Configuration
from .timer.scheduler import Clock, SystemClock

HISTORY_KEY = "ringtimer.history"
HISTORY_CAPACITY = 4
SHORTCUT_COUNT = 3


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


@dataclass(frozen=True)
class HistoryEntry:
    hours: int
    minutes: int
    seconds: int
    timestamp: int  # epoch milliseconds

    @classmethod
    def from_dict(cls, raw: object) -> HistoryEntry | None:
        """Parse one persisted entry, or ``None`` if it is malformed."""
        if not isinstance(raw, dict):
            return None
        try:
            values = {
                name: raw[name]
                for name in ("hours", "minutes", "seconds", "timestamp")
            }
        except KeyError:
            return None
        if not all(
            isinstance(v, int) and not isinstance(v, bool) and v >= 0
            for v in values.values()
        ):
            return None
        return cls(**values)

    @property
    def configuration(self) -> Configuration:
        return Configuration(self.hours, self.minutes, self.seconds)

    def same_duration_as(self, config: Configuration) -> bool:
        return (self.hours, self.minutes, self.seconds) == (
            config.hours, config.minutes, config.seconds,
        )


class ConfigurationStore:
    """Remembers the last few countdowns that were started."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Clock | None = None,
        key: str = HISTORY_KEY,
        capacity: int = HISTORY_CAPACITY,
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._key = key
        self._capacity = capacity

    # ── queries ───────────────────────────────────────────────────────

    def entries(self) -> list[HistoryEntry]:
        """Stored entries, newest first.  Empty on any read problem."""
        return self._read() or []

    def _read(self) -> list[HistoryEntry] | None:
        """Parsed entries, or ``None`` if the store itself failed.

        Absent or corrupt payloads read as an empty list, which a later
        save may overwrite; an unreachable store must not be overwritten.
        """
        try:
            raw = self._store.get(self._key)
        except Exception as exc:
            log.warning("History unavailable, treating as empty: %s", exc)
            return None
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            log.warning("Discarding corrupt history: %s", exc)
            return []
        if not isinstance(data, list):
            log.warning("Discarding history of unexpected type %s", type(data).__name__)
            return []

        entries = []
        for item in data:
            entry = HistoryEntry.from_dict(item)
            if entry is None:
                log.debug("Skipping malformed history entry %r", item)
                continue
            entries.append(entry)
        return entries[: self._capacity]

    def most_recent(self) -> Configuration | None:
        entries = self.entries()
        return entries[0].configuration if entries else None

    def shortcuts(self, defaults: list[Configuration]) -> list[Configuration]:
        """Three quick-select durations, shortest first.

        Uses the history behind the newest entry (the newest is what the
        setup page already shows), then fills any gaps from *defaults*.
        """
        if len(defaults) < SHORTCUT_COUNT:
            raise ValueError(f"need {SHORTCUT_COUNT} default shortcuts, got {len(defaults)}")

        picks: list[Configuration] = []
        for entry in self.entries()[1:SHORTCUT_COUNT + 1]:
            config = entry.configuration
            if config.is_startable:
                picks.append(config)
        picks.sort(key=lambda c: c.total_seconds)

        taken = {c.total_seconds for c in picks}
        for config in defaults:
            if len(picks) >= SHORTCUT_COUNT:
                break
            if config.total_seconds in taken:
                continue
            picks.append(config)
            taken.add(config.total_seconds)
        # Defaults may repeat a history duration; never return fewer than three.
        for config in defaults:
            if len(picks) >= SHORTCUT_COUNT:
                break
            picks.append(config)

        return sorted(picks, key=lambda c: c.total_seconds)

    # ── mutations ─────────────────────────────────────────────────────

    def save(self, config: Configuration) -> None:
        """Record a started countdown.  Zero durations are ignored."""
        if not config.is_startable:
            return
        timestamp = int(self._clock.now() * 1000)
        entries = self._read()
        if entries is None:
            log.warning("Not recording %s: history could not be read", config)
            return

        if entries and entries[0].same_duration_as(config):
            newest = entries[0]
            entries[0] = HistoryEntry(
                newest.hours, newest.minutes, newest.seconds, timestamp,
            )
        else:
            entries.insert(
                0,
                HistoryEntry(config.hours, config.minutes, config.seconds, timestamp),
            )
            del entries[self._capacity:]

        self._write(entries)

    def clear(self) -> None:
        self._write([])

    def _write(self, entries: list[HistoryEntry]) -> None:
        payload = json.dumps([asdict(e) for e in entries])
        try:
            self._store.set(self._key, payload)
        except Exception as exc:
            log.warning("Could not persist history: %s", exc)
