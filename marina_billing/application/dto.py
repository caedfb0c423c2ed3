"""Application-level requests, one per menu command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(slots=True, frozen=True)
class ListInventory:
    pass


@dataclass(slots=True, frozen=True)
class AddBoat:
    record: str


@dataclass(slots=True, frozen=True)
class RemoveBoat:
    name: str


@dataclass(slots=True, frozen=True)
class AcceptPayment:
    name: str
    amount: float


@dataclass(slots=True, frozen=True)
class ApplyMonthlyCharge:
    pass


@dataclass(slots=True, frozen=True)
class Exit:
    pass


Request = Union[ListInventory, AddBoat, RemoveBoat, AcceptPayment, ApplyMonthlyCharge, Exit]

MUTATING_REQUESTS = (AddBoat, RemoveBoat, AcceptPayment, ApplyMonthlyCharge)
