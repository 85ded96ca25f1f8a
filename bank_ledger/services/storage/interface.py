"""
Abstract Audit Storage Interface

DESIGN DECISION: Audit events go through an abstract sink.
The demo and the tests keep the trail in memory; a persistent sink can be
plugged into `AuditLogger` later without touching the ledger store.

The ledger state itself is never written here. It lives in the store for
the lifetime of the process.
"""

from abc import ABC, abstractmethod

from bank_ledger.models.audit import AuditEvent


class AuditStorageInterface(ABC):
    """
    Where audit events end up.

    Append-only: implementations never edit or drop an event.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Store one event. Returns True once it is stored.

        Raises:
            StorageError: the sink could not accept the event
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Events about one transfer, envelope, contact..., oldest first."""
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Up to `limit` events, newest first."""
        pass


class StorageError(Exception):
    """An audit sink failed to store or read events."""
    pass
