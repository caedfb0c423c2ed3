from pathlib import Path

import pytest

from marina_billing.application.dto import (
    AcceptPayment,
    AddBoat,
    ApplyMonthlyCharge,
    Exit,
    ListInventory,
    RemoveBoat,
)
from marina_billing.application.use_cases import (
    MarinaContext,
    MarinaSession,
    accept_payment,
    add_boat,
    apply_monthly_charge,
    list_inventory,
    remove_boat,
)
from marina_billing.domain.results import Outcome
from marina_billing.domain.store import BoatStore
from marina_billing.infrastructure.parsing.boat_csv import ParseMode
from marina_billing.infrastructure.repositories.text_repository import TextFileBoatRepository, load_store


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "BoatData.csv"
    path.write_text("Big Brother,20,slip,27,1450.00\n", encoding="utf-8")
    return path


def test_big_brother_scenario(data_file: Path):
    store = load_store(TextFileBoatRepository(data_file))

    assert len(store) == 1
    boat = store.get("Big Brother")
    assert boat.length == 20
    assert boat.location.number == 27
    assert boat.amount_owed == 1450.0

    rows = list(list_inventory(store).rows)
    assert len(rows) == 1
    assert "# 27" in rows[0]
    assert "$1450.00" in rows[0]

    assert apply_monthly_charge(store).ok
    assert store.get("Big Brother").amount_owed == pytest.approx(1700.0)

    paid = accept_payment(store, "Big Brother", 1700.00)
    assert paid.ok
    assert paid.balance == pytest.approx(0.0)

    refused = accept_payment(store, "Big Brother", 0.01)
    assert refused.outcome is Outcome.PAYMENT_EXCEEDS_BALANCE
    assert refused.balance == pytest.approx(0.0)
    assert refused.message == "That is more than the amount owed, $0.00"


def test_list_is_repeatable_and_read_only():
    store = BoatStore()
    add_boat(store, "Brooks,34,trailer,AAR666,99.00")
    add_boat(store, "Alpha,10,land,B,5.00")
    listing = list_inventory(store).rows

    first = list(listing)
    second = list(listing)

    assert first == second
    assert first[0].startswith("Alpha")
    assert len(store) == 2


def test_add_invalid_record_does_not_mutate():
    store = BoatStore()

    result = add_boat(store, "not,a,boat")

    assert result.outcome is Outcome.INVALID_INPUT
    assert len(store) == 0


def test_add_in_strict_mode_rejects_unknown_location():
    store = BoatStore()

    assert add_boat(store, "Dinghy,8,dock,5,10.00", ParseMode.STRICT).outcome is Outcome.INVALID_INPUT
    assert add_boat(store, "Dinghy,8,dock,5,10.00").ok


def test_add_when_full_reports_capacity():
    store = BoatStore(capacity=1)
    assert add_boat(store, "A,1,slip,1,0").ok

    result = add_boat(store, "B,1,slip,2,0")

    assert result.outcome is Outcome.CAPACITY_EXCEEDED
    assert [boat.name for boat in store] == ["A"]


def test_remove_unknown_boat():
    store = BoatStore()
    add_boat(store, "A,1,slip,1,0")

    assert remove_boat(store, "B").outcome is Outcome.NOT_FOUND
    assert remove_boat(store, "a").ok
    assert len(store) == 0


def test_payment_for_unknown_boat():
    result = accept_payment(BoatStore(), "Ghost", 1.0)

    assert result.outcome is Outcome.NOT_FOUND
    assert result.message == "No boat with that name"


def test_session_exit_saves_store(data_file: Path):
    repository = TextFileBoatRepository(data_file)
    session = MarinaSession(MarinaContext(store=load_store(repository), repository=repository))

    assert session.execute(AddBoat("Brooks,34,trailer,AAR666,99.00")).ok
    assert session.execute(RemoveBoat("big brother")).ok
    assert session.execute(Exit()).ok

    assert data_file.read_text(encoding="utf-8") == "Brooks,34,trailer,AAR666,99.00\n"


def test_session_autosave_persists_each_change(data_file: Path):
    repository = TextFileBoatRepository(data_file)
    session = MarinaSession(MarinaContext(store=load_store(repository), repository=repository, autosave=True))

    session.execute(ApplyMonthlyCharge())
    assert data_file.read_text(encoding="utf-8") == "Big Brother,20,slip,27,1700.00\n"

    session.execute(AcceptPayment("Big Brother", 700.0))
    assert data_file.read_text(encoding="utf-8") == "Big Brother,20,slip,27,1000.00\n"


def test_session_without_autosave_leaves_file_alone(data_file: Path):
    repository = TextFileBoatRepository(data_file)
    session = MarinaSession(MarinaContext(store=load_store(repository), repository=repository))

    session.execute(ApplyMonthlyCharge())
    rows = list(session.execute(ListInventory()).rows)

    assert "$1700.00" in rows[0]
    assert data_file.read_text(encoding="utf-8") == "Big Brother,20,slip,27,1450.00\n"


def test_save_failure_is_reported(tmp_path: Path):
    repository = TextFileBoatRepository(tmp_path)
    session = MarinaSession(MarinaContext(store=BoatStore(), repository=repository))

    result = session.execute(Exit())

    assert result.outcome is Outcome.RESOURCE_UNAVAILABLE
    assert str(tmp_path) in result.message
