"""Validation package."""

from bank_ledger.validation.validator import (
    MAX_AMOUNT,
    LedgerValidator,
    amount_problem,
    clean_optional,
    require_funds,
    require_positive_amount,
    require_signed_amount,
    require_target,
    require_text,
    to_decimal,
)

__all__ = [
    "MAX_AMOUNT",
    "LedgerValidator",
    "amount_problem",
    "clean_optional",
    "require_funds",
    "require_positive_amount",
    "require_signed_amount",
    "require_target",
    "require_text",
    "to_decimal",
]
