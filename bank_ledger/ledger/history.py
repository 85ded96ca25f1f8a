"""
Bounded, newest-first histories.

Transfers, recharges, notifications and biometric attempts are all kept as
capped lists where new entries go to the front and the oldest entry falls
off the tail when the cap is exceeded.
"""

from collections import deque
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar


T = TypeVar("T")


class BoundedHistory(Generic[T]):
    """
    A capped list, newest first, backed by ``deque(maxlen=limit)``.

    ``appendleft`` on a full deque drops the rightmost (oldest) item, which
    is exactly the eviction policy every history in the ledger uses.
    """

    def __init__(self, limit: int, items: Iterable[T] = ()):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._limit = limit
        self._items: deque[T] = deque(maxlen=limit)
        self.reset(items)

    @property
    def limit(self) -> int:
        return self._limit

    def prepend(self, item: T) -> Optional[T]:
        """Insert at the front. Returns the evicted item, if any."""
        evicted = self._items[-1] if len(self._items) == self._limit else None
        self._items.appendleft(item)
        return evicted

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return next((item for item in self._items if predicate(item)), None)

    def replace(self, predicate: Callable[[T], bool], build: Callable[[T], T]) -> Optional[T]:
        """Swap the first matching item for ``build(item)``; returns the new item."""
        for index, item in enumerate(self._items):
            if predicate(item):
                updated = build(item)
                self._items[index] = updated
                return updated
        return None

    def map(self, build: Callable[[T], T]) -> None:
        """Rebuild every item in place, keeping order."""
        self._items = deque((build(item) for item in self._items), maxlen=self._limit)

    def reset(self, items: Iterable[T] = ()) -> None:
        """Replace the contents, keeping at most ``limit`` items from the front."""
        self._items = deque(maxlen=self._limit)
        for item in items:
            if len(self._items) == self._limit:
                break
            self._items.append(item)

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
