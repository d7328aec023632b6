"""String key-value stores.

Both stores expose ``get(key) -> str | None`` and ``set(key, value)``.
They do not swallow errors; callers that must fail soft (the history
store) do so themselves.
"""

from __future__ import annotations

from .db import get_session
from .models import Preference


class SqlKeyValueStore:
    """Key-value pairs in the ``preferences`` table."""

    def get(self, key: str) -> str | None:
        with get_session() as db:
            record = db.get(Preference, key)
            return record.value if record is not None else None

    def set(self, key: str, value: str) -> None:
        with get_session() as db:
            record = db.get(Preference, key)
            if record is None:
                db.add(Preference(key=key, value=value))
            else:
                record.value = value


class MemoryKeyValueStore:
    """Dict-backed store for tests and for running without a database."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
