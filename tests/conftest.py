"""Shared fixtures: a deterministic clock, random source and sleep."""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bank_ledger.audit import AuditLogger
from bank_ledger.config import BiometricSettings, LedgerSettings
from bank_ledger.ledger import LedgerStore
from bank_ledger.services.storage import InMemoryAuditStorage


class FakeClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start: datetime = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def ledger_settings():
    return LedgerSettings(
        starting_balance=Decimal("509015.40"),
        history_limit=20,
        notification_limit=30,
        favorites_bootstrap_size=3,
    )


@pytest.fixture
def biometric_settings():
    return BiometricSettings(
        attempt_limit=5,
        default_latency_ms=900,
        jitter_ms=120,
        min_latency_ms=400,
        device_name="FaceGraph Sensor v2",
    )


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def store(ledger_settings, biometric_settings, audit_storage, clock, rng, fake_sleep):
    return LedgerStore(
        settings=ledger_settings,
        biometric_settings=biometric_settings,
        audit_logger=AuditLogger(audit_storage),
        rng=rng,
        clock=clock,
        sleep=fake_sleep,
    )
