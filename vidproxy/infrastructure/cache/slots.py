"""Containers the caching proxy stores results in.

SingleValueSlot holds one unkeyed result (the video listing); KeyedSlot
maps video ids to results. Both track entries marked stale by a
single-shot refresh; a stale entry is still held but must not be served.
"""

from typing import Any, Dict, Generic, Hashable, Set, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING: Any = object()


class SingleValueSlot(Generic[V]):
    """Holds at most one value."""

    def __init__(self):
        self._value: Any = _MISSING
        self._stale = False

    @property
    def is_filled(self) -> bool:
        return self._value is not _MISSING

    def peek(self) -> Tuple[bool, Any, bool]:
        """Returns (found, value, stale)."""
        if self._value is _MISSING:
            return False, None, False
        return True, self._value, self._stale

    def store(self, value: V, overwrite: bool = False) -> V:
        """Stores value unless a fresh one is already held, and returns the held value.

        A fresh entry is kept when another caller filled the slot first,
        unless overwrite is set.
        """
        if overwrite or self._value is _MISSING or self._stale:
            self._value = value
            self._stale = False
        return self._value

    def mark_stale(self) -> int:
        """Marks the held value stale. Returns 1 if a value was held, else 0."""
        if self._value is _MISSING:
            return 0
        self._stale = True
        return 1

    @property
    def stale_count(self) -> int:
        return 1 if self.is_filled and self._stale else 0

    def clear(self) -> None:
        self._value = _MISSING
        self._stale = False


class KeyedSlot(Generic[K, V]):
    """Maps keys to values, one entry per key."""

    def __init__(self):
        self._entries: Dict[K, V] = {}
        self._stale: Set[K] = set()

    def __contains__(self, key: K) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def peek(self, key: K) -> Tuple[bool, Any, bool]:
        """Returns (found, value, stale) for key."""
        if key not in self._entries:
            return False, None, False
        return True, self._entries[key], key in self._stale

    def store(self, key: K, value: V, overwrite: bool = False) -> V:
        """Stores value for key unless a fresh entry exists, and returns the held value."""
        if overwrite or key not in self._entries or key in self._stale:
            self._entries[key] = value
            self._stale.discard(key)
        return self._entries[key]

    def mark_stale(self) -> int:
        """Marks every current entry stale. Returns how many were marked."""
        self._stale = set(self._entries)
        return len(self._stale)

    @property
    def stale_count(self) -> int:
        return len(self._stale)

    def clear(self) -> None:
        self._entries.clear()
        self._stale.clear()
