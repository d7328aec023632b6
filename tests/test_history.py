"""Tests for configuration history and quick-select shortcuts."""

import json

import pytest

from ringtimer.database.store import MemoryKeyValueStore, SqlKeyValueStore
from ringtimer.history import (
    ConfigurationStore, HistoryEntry, HISTORY_KEY, HISTORY_CAPACITY,
)
from ringtimer.timer.configuration import Configuration


DEFAULTS = [
    Configuration(0, 1, 0),
    Configuration(0, 5, 0),
    Configuration(0, 10, 0),
]


class BrokenStore:
    """A store whose backend is unavailable."""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


class FlakyStore(MemoryKeyValueStore):
    """An in-memory store whose next read can be made to fail once."""

    def __init__(self):
        super().__init__()
        self.fail_next_get = False

    def get(self, key):
        if self.fail_next_get:
            self.fail_next_get = False
            raise OSError("storage briefly unavailable")
        return super().get(key)


def _stored(kv_store):
    return json.loads(kv_store.get(HISTORY_KEY))


# ═══════════════════════════════════════════════════════════════════════════
#  SAVE
# ═══════════════════════════════════════════════════════════════════════════


class TestSave:

    def test_save_records_entry(self, history, kv_store, clock):
        history.save(Configuration(0, 5, 0))
        assert _stored(kv_store) == [
            {"hours": 0, "minutes": 5, "seconds": 0, "timestamp": 1000000},
        ]

    def test_zero_configuration_is_ignored(self, history, kv_store):
        history.save(Configuration())
        assert kv_store.get(HISTORY_KEY) is None
        assert history.entries() == []

    def test_saving_same_twice_updates_timestamp_only(self, history, clock):
        history.save(Configuration(0, 5, 0))
        clock.advance(60)
        history.save(Configuration(0, 5, 0))
        entries = history.entries()
        assert len(entries) == 1
        assert entries[0].timestamp == 1060000

    def test_same_as_older_entry_is_prepended(self, history):
        history.save(Configuration(0, 5, 0))
        history.save(Configuration(0, 10, 0))
        history.save(Configuration(0, 5, 0))
        assert [e.minutes for e in history.entries()] == [5, 10, 5]

    def test_capacity_keeps_four_most_recent(self, history, clock):
        for minutes in range(1, 6):
            clock.advance(1)
            history.save(Configuration(0, minutes, 0))
        entries = history.entries()
        assert len(entries) == HISTORY_CAPACITY
        assert [e.minutes for e in entries] == [5, 4, 3, 2]

    def test_newest_first(self, history):
        history.save(Configuration(0, 0, 30))
        history.save(Configuration(1, 0, 0))
        assert history.most_recent() == Configuration(1, 0, 0)

    def test_clear(self, history):
        history.save(Configuration(0, 5, 0))
        history.clear()
        assert history.entries() == []
        assert history.most_recent() is None


# ═══════════════════════════════════════════════════════════════════════════
#  FAIL-SOFT READS AND WRITES
# ═══════════════════════════════════════════════════════════════════════════


class TestCorruptHistory:

    @pytest.mark.parametrize("payload", [
        "not json at all",
        "{\"hours\": 1}",
        "42",
        "null",
        "",
    ])
    def test_unreadable_payload_is_empty(self, clock, payload):
        store = ConfigurationStore(
            MemoryKeyValueStore({HISTORY_KEY: payload}), clock=clock,
        )
        assert store.entries() == []
        assert store.most_recent() is None
        assert store.shortcuts(DEFAULTS) == DEFAULTS

    def test_malformed_entries_are_dropped(self, clock):
        payload = json.dumps([
            {"hours": 0, "minutes": 3, "seconds": 0, "timestamp": 5},
            {"hours": "x", "minutes": 1, "seconds": 0, "timestamp": 5},
            {"minutes": 2},
            "garbage",
            {"hours": 0, "minutes": 7, "seconds": 0, "timestamp": 4},
        ])
        store = ConfigurationStore(
            MemoryKeyValueStore({HISTORY_KEY: payload}), clock=clock,
        )
        assert [e.minutes for e in store.entries()] == [3, 7]

    def test_save_overwrites_corrupt_history(self, clock):
        kv = MemoryKeyValueStore({HISTORY_KEY: "{{{"})
        store = ConfigurationStore(kv, clock=clock)
        store.save(Configuration(0, 2, 0))
        assert [e.minutes for e in store.entries()] == [2]

    def test_failed_read_does_not_overwrite_history(self, clock):
        kv = FlakyStore()
        store = ConfigurationStore(kv, clock=clock)
        for minutes in (1, 2, 3, 4):
            store.save(Configuration(0, minutes, 0))
        kv.fail_next_get = True
        store.save(Configuration(0, 9, 0))
        assert [e.minutes for e in store.entries()] == [4, 3, 2, 1]

    def test_unavailable_storage_never_raises(self, clock):
        store = ConfigurationStore(BrokenStore(), clock=clock)
        store.save(Configuration(0, 5, 0))
        assert store.entries() == []
        assert store.most_recent() is None
        assert store.shortcuts(DEFAULTS) == DEFAULTS


# ═══════════════════════════════════════════════════════════════════════════
#  SHORTCUTS
# ═══════════════════════════════════════════════════════════════════════════


class TestShortcuts:

    def test_empty_history_returns_defaults(self, history):
        assert history.shortcuts(DEFAULTS) == DEFAULTS

    def test_newest_entry_is_skipped(self, history):
        history.save(Configuration(0, 20, 0))
        assert history.shortcuts(DEFAULTS) == DEFAULTS

    def test_history_sorted_ascending(self, history):
        for config in (
            Configuration(0, 30, 0),
            Configuration(0, 0, 45),
            Configuration(2, 0, 0),
            Configuration(0, 15, 0),   # newest, not a shortcut
        ):
            history.save(config)
        assert history.shortcuts(DEFAULTS) == [
            Configuration(0, 0, 45),
            Configuration(0, 30, 0),
            Configuration(2, 0, 0),
        ]

    def test_partial_history_padded_from_defaults(self, history):
        history.save(Configuration(0, 25, 0))
        history.save(Configuration(0, 3, 0))
        assert history.shortcuts(DEFAULTS) == [
            Configuration(0, 1, 0),
            Configuration(0, 5, 0),
            Configuration(0, 25, 0),
        ]

    def test_padding_skips_duplicate_durations(self, history):
        history.save(Configuration(0, 5, 0))
        history.save(Configuration(0, 3, 0))
        assert history.shortcuts(DEFAULTS) == [
            Configuration(0, 1, 0),
            Configuration(0, 5, 0),
            Configuration(0, 10, 0),
        ]

    def test_always_three(self, history):
        for minutes in (1, 5, 10, 20):
            history.save(Configuration(0, minutes, 0))
        assert len(history.shortcuts(DEFAULTS)) == 3

    def test_too_few_defaults(self, history):
        with pytest.raises(ValueError):
            history.shortcuts(DEFAULTS[:2])


class TestHistoryEntry:

    def test_from_dict_rejects_bool(self):
        raw = {"hours": True, "minutes": 0, "seconds": 0, "timestamp": 0}
        assert HistoryEntry.from_dict(raw) is None

    def test_configuration_round_trip(self):
        entry = HistoryEntry(1, 2, 3, 99)
        assert entry.configuration == Configuration(1, 2, 3)
        assert entry.same_duration_as(Configuration(1, 2, 3))


class TestSqlBackedHistory:

    def test_history_persists_through_database(self, clock):
        first = ConfigurationStore(SqlKeyValueStore(), clock=clock)
        first.save(Configuration(0, 5, 0))
        first.save(Configuration(0, 10, 0))

        second = ConfigurationStore(SqlKeyValueStore(), clock=clock)
        assert second.most_recent() == Configuration(0, 10, 0)
        assert len(second.entries()) == 2
