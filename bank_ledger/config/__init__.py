"""Configuration package."""

from bank_ledger.config.settings import (
    AppSettings,
    BiometricSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BiometricSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
