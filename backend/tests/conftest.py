"""Shared fixtures for the waitlist tests."""

from datetime import datetime, timedelta, timezone

import pytest

from waitlyst.referral import ReferralLedger
from waitlyst.storage import InMemoryBackend, WaitlistStore


class FakeClock:
    """Clock advancing one minute per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    return WaitlistStore(backend)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def ledger(store, clock):
    return ReferralLedger(store, clock=clock)
