"""
Configuration Management for the Bank Ledger

Every tunable is read from the environment (or .env) by pydantic-settings.

DESIGN DECISION: One module owns every tunable.
History caps, the seeded starting balance and the biometric simulation
timings are tunables, not constants buried in the store, so a demo can be
reshaped from the environment without touching code.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bank_ledger.models.ledger import AutomationMatchMode


class LedgerSettings(BaseSettings):
    """Account ledger, contact directory, envelopes and notification feed."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    starting_balance: Decimal = Field(
        default=Decimal("509015.40"),
        ge=0,
        description="Balance the session starts with and returns to on logout"
    )
    history_limit: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Most recent transfers/recharges kept"
    )
    notification_limit: int = Field(
        default=30,
        ge=1,
        le=500,
        description="Most recent notifications kept"
    )
    favorites_bootstrap_size: int = Field(
        default=3,
        ge=0,
        description="New contacts become favorites while the directory is smaller than this"
    )
    automation_match_mode: AutomationMatchMode = Field(
        default=AutomationMatchMode.FAN_OUT,
        description="How several active rules for the same phone are applied"
    )
    currency_symbol: str = Field(
        default="₡",
        description="Symbol used when formatting amounts in notifications"
    )
    max_amount: Decimal = Field(
        default=Decimal("1000000000000"),
        gt=0,
        le=Decimal("100000000000000000"),
        description="Largest amount a single transfer, recharge or allocation may move"
    )
    audit_event_limit: int = Field(
        default=1000,
        ge=1,
        le=100000,
        description="Most recent audit events kept by the in-memory audit trail"
    )


class BiometricSettings(BaseSettings):
    """Simulated biometric sensor configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BIOMETRIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    attempt_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Most recent biometric attempts kept"
    )
    default_latency_ms: int = Field(
        default=900,
        ge=0,
        description="Simulated sensor round-trip when the caller gives none"
    )
    jitter_ms: int = Field(
        default=120,
        ge=0,
        description="Maximum random deviation applied to the latency"
    )
    min_latency_ms: int = Field(
        default=400,
        ge=0,
        description="Floor for the jittered latency"
    )
    device_name: str = Field(
        default="FaceGraph Sensor v2",
        description="Name reported for the simulated sensor"
    )


class AppSettings(BaseSettings):
    """
    Process-level settings: environment name and logging.

    Read without a prefix (LOG_LEVEL, JSON_LOGS, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="development, demo or test"
    )
    debug_mode: bool = Field(
        default=False,
        description="Verbose diagnostics for local runs"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False renders for the console)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Entry point to every settings group.

    Each property reads its group fresh from the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def biometrics(self) -> BiometricSettings:
        return BiometricSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Shared Settings instance.

    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Try to load every settings group.

    Returns a dict of {setting_name: is_valid}, with a `<name>_error`
    entry for every group that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "biometrics", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
