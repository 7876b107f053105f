"""
Insertion-ordered map with explicit FIFO eviction.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections import deque
from typing import Dict, Generic, Iterator, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class BoundedRecordStore(Generic[K, V]):
    """
    Keyed record storage that remembers insertion order.

    Keys are tracked in a separate deque so the oldest entry is always
    ``_order[0]``, independent of how the mapping type iterates. The store
    never evicts on its own; owners call evict_oldest() when they decide
    the ceiling has been crossed.

    Thread-safe: No (single event loop only)

    Example:
        ```python
        store = BoundedRecordStore(max_size=2)
        store.insert("a", 1)
        store.insert("b", 2)
        store.insert("c", 3)
        if store.over_capacity:
            store.evict_oldest()  # drops "a"
        ```
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")

        self._max_size = max_size
        self._records: Dict[K, V] = {}
        self._order: deque[K] = deque()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def over_capacity(self) -> bool:
        return len(self._records) > self._max_size

    def insert(self, key: K, value: V) -> None:
        """
        Add a record under a new key.

        Raises:
            KeyError: If key is already present (keys are never reused)
        """
        if key in self._records:
            raise KeyError(f"duplicate key: {key!r}")
        self._records[key] = value
        self._order.append(key)

    def get(self, key: K) -> Optional[V]:
        return self._records.get(key)

    def evict_oldest(self) -> Optional[Tuple[K, V]]:
        """Remove and return the oldest (key, value) pair, or None if empty."""
        if not self._order:
            return None
        key = self._order.popleft()
        return key, self._records.pop(key)

    def values(self) -> Iterator[V]:
        """Iterate records oldest first."""
        for key in self._order:
            yield self._records[key]

    def clear(self) -> None:
        self._records.clear()
        self._order.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records
