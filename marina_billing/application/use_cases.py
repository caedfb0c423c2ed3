"""Application services behind the marina command menu.

Every command takes the store plus already-obtained input and returns a
:class:`CommandResult`; domain errors are turned into outcomes here and never
escape to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

from marina_billing.application.dto import (
    MUTATING_REQUESTS,
    AcceptPayment,
    AddBoat,
    ApplyMonthlyCharge,
    Exit,
    ListInventory,
    RemoveBoat,
    Request,
)
from marina_billing.domain.errors import (
    CapacityExceeded,
    NotFound,
    ParseFailure,
    PaymentExceedsBalance,
    ResourceUnavailable,
)
from marina_billing.domain.models import Boat
from marina_billing.domain.repositories import BoatRepository
from marina_billing.domain.results import CommandResult, Outcome
from marina_billing.domain.services import BillingService
from marina_billing.domain.store import BoatStore
from marina_billing.infrastructure.parsing.boat_csv import ParseMode, decode_line
from marina_billing.presentation.inventory_report import format_row

_LOG = logging.getLogger(__name__)


class InventoryListing:
    """Lazy, restartable view of the store as formatted inventory rows."""

    def __init__(self, store: BoatStore, formatter: Callable[[Boat], str] = format_row) -> None:
        self._store = store
        self._formatter = formatter

    def __iter__(self) -> Iterator[str]:
        for boat in self._store:
            yield self._formatter(boat)

    def __len__(self) -> int:
        return len(self._store)


def list_inventory(store: BoatStore) -> CommandResult:
    return CommandResult.success(rows=InventoryListing(store))


def add_boat(store: BoatStore, record: str, mode: ParseMode = ParseMode.LEGACY) -> CommandResult:
    try:
        boat = decode_line(record, mode)
    except ParseFailure as exc:
        _LOG.info("Rejected add: %s", exc)
        return CommandResult(Outcome.INVALID_INPUT, "Invalid CSV format.")
    try:
        store.insert(boat)
    except CapacityExceeded as exc:
        _LOG.info("Rejected add of %r: %s", boat.name, exc)
        return CommandResult(Outcome.CAPACITY_EXCEEDED, "Cannot add new boat: the marina is full.")
    _LOG.info("Added %r", boat.name)
    return CommandResult.success(boat=boat)


def remove_boat(store: BoatStore, name: str) -> CommandResult:
    try:
        removed = store.remove(name)
    except NotFound:
        return CommandResult(Outcome.NOT_FOUND, "No boat with that name")
    _LOG.info("Removed %r", removed.name)
    return CommandResult.success(boat=removed)


def accept_payment(
    store: BoatStore,
    name: str,
    amount: float,
    billing: BillingService | None = None,
) -> CommandResult:
    billing = billing or BillingService()
    try:
        boat = billing.accept_payment(store, name, amount)
    except NotFound:
        return CommandResult(Outcome.NOT_FOUND, "No boat with that name")
    except PaymentExceedsBalance as exc:
        return CommandResult(
            Outcome.PAYMENT_EXCEEDS_BALANCE,
            f"That is more than the amount owed, ${exc.balance:.2f}",
            balance=exc.balance,
        )
    _LOG.info("Payment of %.2f accepted from %r; now owes %.2f", amount, boat.name, boat.amount_owed)
    return CommandResult.success(boat=boat, balance=boat.amount_owed)


def apply_monthly_charge(store: BoatStore, billing: BillingService | None = None) -> CommandResult:
    billing = billing or BillingService()
    billing.apply_monthly_charges(store)
    _LOG.info("Applied monthly charges to %d boat(s)", len(store))
    return CommandResult.success()


def save_inventory(store: BoatStore, repository: BoatRepository) -> CommandResult:
    try:
        repository.save_boats(store)
    except ResourceUnavailable as exc:
        _LOG.error("%s", exc)
        return CommandResult(Outcome.RESOURCE_UNAVAILABLE, str(exc))
    return CommandResult.success()


@dataclass(slots=True)
class MarinaContext:
    store: BoatStore
    repository: BoatRepository
    billing: BillingService = field(default_factory=BillingService)
    parse_mode: ParseMode = ParseMode.LEGACY
    autosave: bool = False


class MarinaSession:
    """Dispatches menu requests against one store and its backing repository."""

    def __init__(self, context: MarinaContext) -> None:
        self._context = context

    @property
    def store(self) -> BoatStore:
        return self._context.store

    def execute(self, request: Request) -> CommandResult:
        context = self._context
        if isinstance(request, ListInventory):
            result = list_inventory(context.store)
        elif isinstance(request, AddBoat):
            result = add_boat(context.store, request.record, context.parse_mode)
        elif isinstance(request, RemoveBoat):
            result = remove_boat(context.store, request.name)
        elif isinstance(request, AcceptPayment):
            result = accept_payment(context.store, request.name, request.amount, context.billing)
        elif isinstance(request, ApplyMonthlyCharge):
            result = apply_monthly_charge(context.store, context.billing)
        elif isinstance(request, Exit):
            return self.save()
        else:
            raise TypeError(f"Unsupported request: {request!r}")

        if context.autosave and result.ok and isinstance(request, MUTATING_REQUESTS):
            saved = self.save()
            if not saved.ok:
                return saved
        return result

    def save(self) -> CommandResult:
        return save_inventory(self._context.store, self._context.repository)
