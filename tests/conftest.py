"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from fishing_journal.config import settings
from fishing_journal.db import ContestRepository, init_db
from fishing_journal.models.contest import CatchType, ContestEntry, LineSetup


@pytest.fixture(autouse=True)
def no_weather_delay(monkeypatch):
    """Skip the simulated weather latency in tests."""
    monkeypatch.setattr(settings, "weather_delay", 0)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def repository(temp_db_path):
    """A contest repository on an initialized temporary database."""
    asyncio.run(init_db(temp_db_path))
    return ContestRepository(temp_db_path)


@pytest.fixture
def make_contest():
    """Factory for contests with sensible defaults."""

    def _make(**kwargs) -> ContestEntry:
        kwargs.setdefault("date", "2024-05-01")
        kwargs.setdefault("location", "Messancy")
        kwargs.setdefault("lines", [LineSetup(float_size=1.5, hook="Kamasan B911 n°18")])
        return ContestEntry(**kwargs)

    return _make


@pytest.fixture
def sample_contests(make_contest):
    """Two Messancy contests, one won, in delivery (date descending) order."""
    return [
        make_contest(
            date="2024-05-01",
            total_weight=3000,
            ranking="Gagné",
            catches=[CatchType.GARDONS, CatchType.BREMES],
        ),
        make_contest(
            date="2024-04-01",
            total_weight=1000,
            ranking="3e",
            catches=[CatchType.GARDONS],
        ),
    ]
