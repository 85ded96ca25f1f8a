"""
Storage Services Package

Provides the abstract audit storage interface and the in-memory implementation.
"""

from bank_ledger.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from bank_ledger.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
