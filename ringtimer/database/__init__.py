"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import Preference
from .store import SqlKeyValueStore, MemoryKeyValueStore

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "Preference",
    "SqlKeyValueStore",
    "MemoryKeyValueStore",
]
