from io import BytesIO

import pandas as pd
import pytest

from marina_billing.domain.models import (
    Boat,
    LandLocation,
    LocationKind,
    SlipLocation,
    StorageLocation,
    TrailerLocation,
)
from marina_billing.presentation.inventory_report import (
    billing_summary,
    format_row,
    render_csv,
    render_html,
    render_xlsx,
)

BOATS = (
    Boat("Big Brother", 20, SlipLocation(27), 1450.0),
    Boat("Brooks", 34, TrailerLocation("AAR666"), 99.0),
    Boat("Frosty", 12, StorageLocation(4), 0.0),
    Boat("Sea Ray", 18, LandLocation("C"), 12.5),
)


def test_format_row_matches_legacy_layout():
    assert format_row(BOATS[0]) == "Big Brother" + " " * 11 + " 20'    slip   # 27   Owes $1450.00"
    assert format_row(BOATS[1]).endswith("34' trailer AAR666   Owes $  99.00")
    assert format_row(BOATS[2]).endswith("12' storage   #  4   Owes $   0.00")
    assert format_row(BOATS[3]).endswith("18'    land      C   Owes $  12.50")


def test_render_csv():
    lines = render_csv(BOATS[:1]).decode("utf-8").splitlines()

    assert lines == ["name,length,location,detail,amount_owed", "Big Brother,20,slip,27,1450.00"]
    assert render_csv(()) == b"name,length,location,detail,amount_owed\n"


def test_render_html():
    assert render_html(()) == "<p>No boats on record.</p>"
    html = render_html(BOATS)
    assert html.startswith("<table>")
    assert "<td>AAR666</td>" in html
    assert "<td>99.00</td>" in html


def test_render_html_escapes_cell_values():
    html = render_html([Boat("<b>Tom & Jerry</b>", 10, TrailerLocation("<x>"), 0.0)])

    assert "<td>&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;</td>" in html
    assert "<td>&lt;x&gt;</td>" in html
    assert "<b>" not in html


def test_render_xlsx_round_trips_through_pandas():
    frame = pd.read_excel(BytesIO(render_xlsx(BOATS)), sheet_name="Inventory", engine="openpyxl")

    assert list(frame["name"]) == [boat.name for boat in BOATS]
    assert list(frame["location"]) == ["slip", "trailer", "storage", "land"]


def test_billing_summary():
    summary = billing_summary(BOATS + (Boat("Tug", 40, SlipLocation(2), 50.0),))

    assert summary.total_boats == 5
    assert summary.total_owed == pytest.approx(1611.5)
    slip = next(item for item in summary.by_kind if item.kind is LocationKind.SLIP)
    assert slip.boats == 2
    assert slip.owed == pytest.approx(1500.0)
