"""Error conditions raised by the marina domain and its file boundary."""
from __future__ import annotations

from pathlib import Path


class MarinaError(Exception):
    """Base class for every recoverable marina condition."""


class ParseFailure(MarinaError):
    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class NotFound(MarinaError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No boat with that name: {name!r}")
        self.name = name


class CapacityExceeded(MarinaError):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Store is full ({capacity} boats)")
        self.capacity = capacity


class PaymentExceedsBalance(MarinaError):
    def __init__(self, name: str, amount: float, balance: float) -> None:
        super().__init__(f"Payment {amount:.2f} exceeds balance {balance:.2f} for {name!r}")
        self.name = name
        self.amount = amount
        self.balance = balance


class ResourceUnavailable(MarinaError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to write file '{path}': {reason}")
        self.path = path
        self.reason = reason
