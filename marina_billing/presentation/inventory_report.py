"""Inventory report generators for the boats in a store."""
from __future__ import annotations

import csv
import html
import io
from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from marina_billing.domain.models import (
    Boat,
    LandLocation,
    LocationKind,
    SlipLocation,
    StorageLocation,
    TrailerLocation,
)

REPORT_COLUMNS = ("name", "length", "location", "detail", "amount_owed")


def describe_location(boat: Boat) -> str:
    location = boat.location
    if isinstance(location, SlipLocation):
        return f"   slip   # {location.number:2d}"
    if isinstance(location, LandLocation):
        return f"   land      {location.bay}"
    if isinstance(location, TrailerLocation):
        return f"trailer {location.tag:>6s}"
    return f"storage   # {location.slot:2d}"


def format_row(boat: Boat) -> str:
    """One aligned inventory line, e.g. ``Big Brother  20'    slip   # 27   Owes $1450.00``."""
    return f"{boat.name:<22s} {boat.length:2d}' {describe_location(boat)}   Owes ${boat.amount_owed:7.2f}"


def boats_to_rows(boats: Iterable[Boat]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for boat in boats:
        rows.append(
            {
                "name": boat.name,
                "length": boat.length,
                "location": boat.kind.value,
                "detail": boat.location.token(),
                "amount_owed": round(boat.amount_owed, 2),
            }
        )
    return rows


def boats_to_dataframe(boats: Iterable[Boat]) -> pd.DataFrame:
    return pd.DataFrame(
        boats_to_rows(boats),
        columns=list(REPORT_COLUMNS),
    )


def _export_cells(boat: Boat) -> tuple[str, ...]:
    return (boat.name, str(boat.length), boat.kind.value, boat.location.token(), f"{boat.amount_owed:.2f}")


def render_csv(boats: Iterable[Boat]) -> bytes:
    """Inventory as CSV with a header row; written even when there are no boats."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(REPORT_COLUMNS)
    writer.writerows(_export_cells(boat) for boat in boats)
    return buffer.getvalue().encode("utf-8")


def render_html(boats: Iterable[Boat]) -> str:
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in _export_cells(boat)) + "</tr>"
        for boat in boats
    )
    if not body:
        return "<p>No boats on record.</p>"
    header = "".join(f"<th>{column}</th>" for column in REPORT_COLUMNS)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>"


def render_xlsx(boats: Sequence[Boat], sheet_name: str = "Inventory") -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        boats_to_dataframe(boats).to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()


@dataclass(frozen=True)
class KindTotals:
    kind: LocationKind
    boats: int
    owed: float


@dataclass(frozen=True)
class BillingSummary:
    total_boats: int
    total_owed: float
    by_kind: Sequence[KindTotals]


def billing_summary(boats: Iterable[Boat]) -> BillingSummary:
    counts = {kind: 0 for kind in LocationKind}
    owed = {kind: 0.0 for kind in LocationKind}
    for boat in boats:
        counts[boat.kind] += 1
        owed[boat.kind] += boat.amount_owed
    return BillingSummary(
        total_boats=sum(counts.values()),
        total_owed=sum(owed.values()),
        by_kind=tuple(KindTotals(kind=kind, boats=counts[kind], owed=owed[kind]) for kind in LocationKind),
    )
