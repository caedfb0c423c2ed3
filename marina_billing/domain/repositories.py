"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .models import Boat


class BoatRepository(Protocol):
    """Reads and writes the persisted boat records."""

    def load_boats(self) -> Sequence[Boat]:
        ...

    def save_boats(self, boats: Iterable[Boat]) -> None:
        ...
