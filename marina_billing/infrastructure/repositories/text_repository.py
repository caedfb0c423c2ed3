"""Text-file backed repository for boat records."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from marina_billing.domain.errors import ResourceUnavailable
from marina_billing.domain.models import Boat
from marina_billing.domain.repositories import BoatRepository
from marina_billing.domain.store import DEFAULT_CAPACITY, BoatStore
from marina_billing.infrastructure.parsing.boat_csv import ParseMode, decode_lines, encode_boat

_LOG = logging.getLogger(__name__)


class TextFileBoatRepository(BoatRepository):
    def __init__(
        self,
        path: Path | str,
        mode: ParseMode = ParseMode.LEGACY,
        encoding: str = "utf-8",
    ) -> None:
        self._path = Path(path)
        self._mode = mode
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def load_boats(self) -> Sequence[Boat]:
        if not self._path.exists():
            _LOG.info("Data file %s does not exist; starting empty", self._path)
            return []
        with self._path.open("r", encoding=self._encoding) as handle:
            boats = list(decode_lines(handle, self._mode))
        _LOG.info("Loaded %d boat(s) from %s", len(boats), self._path)
        return boats

    def save_boats(self, boats: Iterable[Boat]) -> None:
        try:
            with self._path.open("w", encoding=self._encoding) as handle:
                for boat in boats:
                    handle.write(encode_boat(boat) + "\n")
        except OSError as exc:
            raise ResourceUnavailable(self._path, exc.strerror or str(exc)) from exc
        _LOG.info("Saved boats to %s", self._path)


def load_store(repository: BoatRepository, capacity: int | None = DEFAULT_CAPACITY) -> BoatStore:
    return BoatStore.from_boats(repository.load_boats(), capacity=capacity)


def save_store(repository: BoatRepository, store: BoatStore) -> None:
    repository.save_boats(store)
