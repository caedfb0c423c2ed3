"""In-memory collection of boats kept in case-insensitive name order."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from .errors import CapacityExceeded, NotFound
from .models import Boat

DEFAULT_CAPACITY = 120

_LOG = logging.getLogger(__name__)


class BoatStore:
    """Ordered, optionally bounded collection of boats.

    The store owns its boats. Positions are not stable across mutations, so
    callers look boats up by name rather than holding on to an index.
    """

    def __init__(self, capacity: int | None = DEFAULT_CAPACITY) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._capacity = capacity
        self._boats: list[Boat] = []

    @classmethod
    def from_boats(cls, boats: Iterable[Boat], capacity: int | None = DEFAULT_CAPACITY) -> BoatStore:
        """Build a store from loaded boats, discarding any past the capacity."""
        store = cls(capacity=capacity)
        dropped = 0
        for boat in boats:
            if store.is_full():
                dropped += 1
                continue
            store._boats.append(boat)
        if dropped:
            _LOG.info("Store full at %s boats; discarded %d loaded record(s)", capacity, dropped)
        store.sort()
        return store

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def __len__(self) -> int:
        return len(self._boats)

    def __iter__(self) -> Iterator[Boat]:
        return iter(tuple(self._boats))

    def __getitem__(self, index: int) -> Boat:
        return self._boats[index]

    def is_full(self) -> bool:
        return self._capacity is not None and len(self._boats) >= self._capacity

    def find_by_name(self, name: str) -> int | None:
        for index, boat in enumerate(self._boats):
            if boat.matches(name):
                return index
        return None

    def get(self, name: str) -> Boat:
        index = self.find_by_name(name)
        if index is None:
            raise NotFound(name)
        return self._boats[index]

    def insert(self, boat: Boat) -> None:
        if self.is_full():
            raise CapacityExceeded(self._capacity)
        self._boats.append(boat)
        self.sort()

    def remove(self, name: str) -> Boat:
        index = self.find_by_name(name)
        if index is None:
            raise NotFound(name)
        removed = self._boats.pop(index)
        self.sort()
        return removed

    def replace(self, name: str, boat: Boat) -> Boat:
        """Swap the first boat matching ``name`` for ``boat``; returns the old one."""
        index = self.find_by_name(name)
        if index is None:
            raise NotFound(name)
        previous = self._boats[index]
        self._boats[index] = boat
        self.sort()
        return previous

    def apply(self, update: Callable[[Boat], Boat]) -> None:
        self._boats = [update(boat) for boat in self._boats]
        self.sort()

    def sort(self) -> None:
        # list.sort is stable, so boats sharing a name keep their insertion order
        self._boats.sort(key=Boat.sort_key)
