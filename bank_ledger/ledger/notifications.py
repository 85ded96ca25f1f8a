"""
Notification Feed

A bounded, newest-first log of user-facing events. Every user-visible ledger
mutation appends exactly one entry; when the cap is reached the oldest entry
is evicted from the tail.
"""

from typing import Callable, Iterable, Optional

from bank_ledger.ledger.history import BoundedHistory
from bank_ledger.ledger.ids import create_id
from bank_ledger.models.ledger import NotificationCategory, NotificationItem, utc_now


class NotificationFeed:
    def __init__(
        self,
        limit: int = 30,
        items: Iterable[NotificationItem] = (),
        clock: Callable = utc_now,
    ):
        self._clock = clock
        self._items: BoundedHistory[NotificationItem] = BoundedHistory(limit, items)

    @property
    def limit(self) -> int:
        return self._items.limit

    def reset(self, items: Iterable[NotificationItem] = ()) -> None:
        self._items.reset(items)

    def to_list(self) -> list[NotificationItem]:
        return self._items.to_list()

    def add(
        self,
        title: str,
        message: str,
        category: NotificationCategory = NotificationCategory.GENERAL,
    ) -> NotificationItem:
        item = NotificationItem(
            id=create_id("notification"),
            title=title.strip(),
            message=message.strip(),
            timestamp=self._clock(),
            category=NotificationCategory(category or NotificationCategory.GENERAL),
        )
        self._items.prepend(item)
        return item

    def mark_read(self, notification_id: str) -> Optional[NotificationItem]:
        return self._items.replace(
            lambda item: item.id == notification_id,
            lambda item: item.model_copy(update={"read": True}),
        )

    def toggle_read(self, notification_id: str) -> Optional[NotificationItem]:
        return self._items.replace(
            lambda item: item.id == notification_id,
            lambda item: item.model_copy(update={"read": not item.read}),
        )

    def mark_all_read(self) -> None:
        self._items.map(
            lambda item: item if item.read else item.model_copy(update={"read": True})
        )

    def clear(self) -> None:
        self._items.clear()

    def unread_count(self) -> int:
        return sum(1 for item in self._items if not item.read)

    def __len__(self) -> int:
        return len(self._items)
