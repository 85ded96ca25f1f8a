"""In-process audit storage, used by the demo store and the tests."""

import threading
from collections import deque
from itertools import islice
from typing import Optional

from bank_ledger.models.audit import AuditEvent, AuditEventType
from bank_ledger.services.storage.interface import AuditStorageInterface


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Keeps audit events oldest first.

    With a limit, the trail is a ``deque(maxlen=limit)`` and the oldest
    event is dropped once it is full. Without one it grows for the life
    of the process.
    """

    def __init__(self, limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError("limit must be at least 1")
        self._events: deque[AuditEvent] = deque(maxlen=limit)
        self._lock = threading.Lock()

    @property
    def limit(self) -> Optional[int]:
        return self._events.maxlen

    def append_event(self, event: AuditEvent) -> bool:
        with self._lock:
            self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        with self._lock:
            return [
                event for event in self._events
                if event.entity_type == entity_type and event.entity_id == entity_id
            ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        if limit <= 0:
            return []
        with self._lock:
            return list(islice(reversed(self._events), limit))

    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        with self._lock:
            return [event for event in self._events if event.event_type == event_type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
