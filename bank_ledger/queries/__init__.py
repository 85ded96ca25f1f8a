"""Read-side queries package."""

from bank_ledger.queries.executor import (
    AccountSummary,
    ActivityEntry,
    ActivityFilter,
    ActivityGroup,
    ActivityKind,
    LedgerQueries,
)

__all__ = [
    "AccountSummary",
    "ActivityEntry",
    "ActivityFilter",
    "ActivityGroup",
    "ActivityKind",
    "LedgerQueries",
]
