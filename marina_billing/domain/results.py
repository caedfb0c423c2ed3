"""Domain-level results for marina commands."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import Boat


class Outcome(str, Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    PAYMENT_EXCEEDS_BALANCE = "payment_exceeds_balance"
    RESOURCE_UNAVAILABLE = "resource_unavailable"


@dataclass(frozen=True)
class CommandResult:
    outcome: Outcome
    message: str = ""
    boat: Boat | None = None
    balance: float | None = None
    rows: Iterable[str] | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, message: str = "", **kwargs: object) -> CommandResult:
        return cls(Outcome.OK, message, **kwargs)
