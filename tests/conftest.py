"""Shared pytest fixtures for SimplePomodoro tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from simplepomodoro.database.db import configure_engine, init_db
from simplepomodoro.database.store import WorkLogStore
from simplepomodoro.errors import WorkLogStoreError
from simplepomodoro.timer.engine import TimerEngine
from simplepomodoro.timer.machine import SessionConfig


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
def store():
    return WorkLogStore()


class BrokenStore(WorkLogStore):
    """A store whose database is always unreachable."""

    def __init__(self):
        self.attempts: list[int] = []

    def append(self, duration_seconds, occurred_at=None):
        self.attempts.append(duration_seconds)
        raise WorkLogStoreError("database unreachable")

    def list(self):
        raise WorkLogStoreError("database unreachable")


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def config():
    """Small session so whole runs take a few hundred ticks."""
    return SessionConfig(
        target_loops=4,
        work_minutes=2,
        rest_minutes=1,
        long_rest_minutes=3,
        supports_long_rest=True,
    )


@pytest.fixture
def engine(qapp, store, config):
    """Fresh TimerEngine logging to the in-memory store."""
    eng = TimerEngine(parent=None, config=config, store=store)
    yield eng
    eng.reset_to_idle()


@pytest.fixture
def engine_no_store(qapp, config):
    """Fresh TimerEngine without a store (pure state-machine tests)."""
    eng = TimerEngine(parent=None, config=config)
    yield eng
    eng.reset_to_idle()
