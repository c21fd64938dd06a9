"""
Pytest configuration and fixtures.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LIST_DEFAULT_LIMIT", "10")


class StepClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(clock):
    """Empty in-memory store with a deterministic clock."""
    from core.storage import InMemoryItemStore
    return InMemoryItemStore(clock=clock)


@pytest.fixture
def dispatcher(store):
    from manager.dispatcher import RequestDispatcher
    return RequestDispatcher(store, default_limit=10)
