"""Key-value repository with generated integer keys."""

import threading
from collections.abc import Callable
from itertools import count
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    """Interface for a store that assigns keys to the values it holds."""

    def add(self, factory: Callable[[int], T]) -> T:
        """Build a value for a fresh key, store it and return it."""

    def get(self, key: int) -> T | None:
        """Return the value stored under ``key``, if present."""


class InMemoryRepository(Generic[T]):
    """Thread-safe in-memory repository with keys starting at 1.

    Keys are handed out in strictly increasing order. A value becomes visible
    to ``get`` only once its factory has returned, so readers never observe a
    key without its value.
    """

    def __init__(self, start: int = 1) -> None:
        self._keys = count(start)
        self._items: dict[int, T] = {}
        self._lock = threading.Lock()

    def add(self, factory: Callable[[int], T]) -> T:
        """Call ``factory`` once with a new key and store its result."""
        with self._lock:
            key = next(self._keys)
        value = factory(key)
        with self._lock:
            self._items[key] = value
        return value

    def get(self, key: int) -> T | None:
        """Return a stored value or ``None`` when the key is unknown."""
        with self._lock:
            return self._items.get(key)
