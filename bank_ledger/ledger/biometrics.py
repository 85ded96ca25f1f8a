"""
Biometric Simulation

Simulates a sensor round-trip for the demo login. No biometric matching
happens: the outcome is success when the caller expects a match, otherwise
a random pick among success, mismatch and timeout.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from bank_ledger.config import BiometricSettings
from bank_ledger.ledger.history import BoundedHistory
from bank_ledger.ledger.ids import create_id
from bank_ledger.models.ledger import BiometricAttempt, BiometricResult, utc_now


ATTEMPT_LABEL = "Validación biométrica"


class BiometricSimulator:
    """Sensor state plus the capped attempt log."""

    def __init__(
        self,
        settings: BiometricSettings,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable = utc_now,
    ):
        self._settings = settings
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock
        self._attempts: BoundedHistory[BiometricAttempt] = BoundedHistory(settings.attempt_limit)
        self.registered = False
        self.last_sync = None
        self.device_name = settings.device_name

    def snapshot(self) -> tuple:
        return (self.registered, self.last_sync, self.device_name, self._attempts.to_list())

    def restore(self, state: tuple) -> None:
        self.registered, self.last_sync, self.device_name, attempts = state
        self._attempts.reset(attempts)

    def attempts(self) -> list[BiometricAttempt]:
        return self._attempts.to_list()

    def delay_ms(self, latency_ms: Optional[int] = None) -> int:
        """`max(min_latency, latency ± jitter)`."""
        latency = self._settings.default_latency_ms if latency_ms is None else latency_ms
        jitter = self._rng.randint(-self._settings.jitter_ms, self._settings.jitter_ms)
        return max(self._settings.min_latency_ms, latency + jitter)

    def pick_result(self, expected_match: bool) -> BiometricResult:
        if expected_match:
            return BiometricResult.SUCCESS
        return self._rng.choice(list(BiometricResult))

    async def round_trip(
        self,
        latency_ms: Optional[int] = None,
        expected_match: bool = False,
    ) -> BiometricAttempt:
        """Wait out the simulated sensor and build (not record) the attempt."""
        delay = self.delay_ms(latency_ms)
        result = self.pick_result(expected_match)
        await self._sleep(delay / 1000)
        return BiometricAttempt(
            id=create_id("biometric"),
            label=ATTEMPT_LABEL,
            result=result,
            timestamp=self._clock(),
            device=self.device_name,
        )

    def record(self, attempt: BiometricAttempt) -> None:
        """Log the attempt; only a success registers the sensor."""
        self._attempts.prepend(attempt)
        if attempt.result == BiometricResult.SUCCESS:
            self.registered = True
            self.last_sync = attempt.timestamp

    def register(self, display_name: Optional[str] = None) -> None:
        if display_name and display_name.strip():
            self.device_name = display_name.strip()
        self.registered = True
        self.last_sync = self._clock()
