"""Shared test fixtures for Joidu focus tests.

This module provides common fixtures used across all test modules:
- Store isolation (in-memory and temporary SQLite)
- A controllable clock
- Seeded randomness for cosmetic text

Usage:
    def test_something(memory_store, fake_clock):
        fake_clock.advance(minutes=25)
        ...
"""

import os
import random
import tempfile
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from joidu.focus.store import MemoryStore, SQLiteStore
from joidu.logging_config import setup_logging


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_DIR = PROJECT_ROOT / "joidu"


# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Route structlog through stdlib to stderr so stdout stays clean JSON."""
    setup_logging(level="DEBUG")


# ─────────────────────────────────────────────────────────────────────────────
# Clock
# ─────────────────────────────────────────────────────────────────────────────


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, minutes: float = 0, seconds: float = 0) -> datetime:
        self.current += timedelta(minutes=minutes, seconds=seconds)
        return self.current

    def set_hour(self, hour: int) -> datetime:
        self.current = self.current.replace(hour=hour, minute=0, second=0)
        return self.current


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock fixed at 09:00 on a Monday."""
    return FakeClock(datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc))


# ─────────────────────────────────────────────────────────────────────────────
# Store Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        os.unlink(db_path)


@pytest.fixture
def sqlite_store(temp_db: Path) -> SQLiteStore:
    return SQLiteStore(temp_db)


# ─────────────────────────────────────────────────────────────────────────────
# Randomness
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)
