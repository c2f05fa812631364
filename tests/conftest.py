"""Shared pytest fixtures for adscore tests."""

from datetime import datetime, timedelta, timezone

import pytest

from adscore.models.types import CampaignRecord
from adscore.sessions.store import InMemorySessionStore


class FakeClock:
    """Manually advanced clock for session expiry tests."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock frozen at 2024-01-01 12:00 UTC."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    """In-memory session store driven by the fake clock."""
    return InMemorySessionStore(clock=clock)


@pytest.fixture
def make_record():
    """Factory for CampaignRecord with pre-computed rates."""

    def _make(name: str = "Campaign", ctr: float = 0.0, conversion_rate: float = 0.0, **extra):
        return CampaignRecord(name=name, ctr=ctr, conversion_rate=conversion_rate, **extra)

    return _make
