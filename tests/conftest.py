"""Shared pytest fixtures for RingTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from ringtimer.database.db import configure_engine, init_db
from ringtimer.database.store import MemoryKeyValueStore
from ringtimer.history import ConfigurationStore
from ringtimer.timer.engine import TimerEngine

from helpers import FakeClock, FakeScheduler


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def engine(qapp, clock, scheduler):
    """Fresh TimerEngine on a fake clock and a manual scheduler."""
    return TimerEngine(parent=None, clock=clock, scheduler=scheduler)


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def history(kv_store, clock):
    return ConfigurationStore(kv_store, clock=clock)
