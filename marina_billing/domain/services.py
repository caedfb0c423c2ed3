"""Domain services implementing the marina billing rules."""
from __future__ import annotations

from dataclasses import replace
from typing import Mapping

from .errors import PaymentExceedsBalance
from .models import Boat, LocationKind
from .store import BoatStore

DEFAULT_MONTHLY_RATES: Mapping[LocationKind, float] = {
    LocationKind.SLIP: 12.50,
    LocationKind.LAND: 14.00,
    LocationKind.TRAILER: 25.00,
    LocationKind.STORAGE: 11.20,
}


class BillingService:
    """Applies per-foot monthly charges and payments to boats in a store."""

    def __init__(self, monthly_rates: Mapping[LocationKind, float] | None = None) -> None:
        rates = dict(DEFAULT_MONTHLY_RATES)
        if monthly_rates:
            rates.update(monthly_rates)
        self._rates = rates

    def rate_for(self, kind: LocationKind) -> float:
        return self._rates[kind]

    def monthly_charge(self, boat: Boat) -> float:
        return self.rate_for(boat.kind) * boat.length

    def charge(self, boat: Boat) -> Boat:
        return replace(boat, amount_owed=boat.amount_owed + self.monthly_charge(boat))

    def apply_monthly_charges(self, store: BoatStore) -> None:
        store.apply(self.charge)

    @staticmethod
    def accept_payment(store: BoatStore, name: str, amount: float) -> Boat:
        boat = store.get(name)
        if amount > boat.amount_owed:
            raise PaymentExceedsBalance(boat.name, amount, boat.amount_owed)
        paid = replace(boat, amount_owed=boat.amount_owed - amount)
        store.replace(name, paid)
        return paid
