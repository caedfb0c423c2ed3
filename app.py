"""Streamlit front-end for the marina billing system."""
from __future__ import annotations

from pathlib import Path

import pandas as pd
import streamlit as st

from marina_billing import BillingService, MarinaContext, MarinaSession, TextFileBoatRepository
from marina_billing.application.dto import AcceptPayment, AddBoat, ApplyMonthlyCharge, RemoveBoat
from marina_billing.config import SETTINGS
from marina_billing.domain.results import CommandResult
from marina_billing.infrastructure.repositories.text_repository import load_store
from marina_billing.presentation.inventory_report import (
    billing_summary,
    boats_to_dataframe,
    render_csv,
    render_html,
    render_xlsx,
)


st.set_page_config(page_title="Marina Billing", layout="wide")
st.title("Boat Management System")


def open_session(path: str) -> MarinaSession:
    repository = TextFileBoatRepository(path, mode=SETTINGS.parse_mode)
    context = MarinaContext(
        store=load_store(repository, capacity=SETTINGS.capacity),
        repository=repository,
        billing=BillingService(SETTINGS.monthly_rates),
        parse_mode=SETTINGS.parse_mode,
        autosave=SETTINGS.autosave,
    )
    return MarinaSession(context)


def show_result(result: CommandResult, success: str) -> None:
    if result.ok:
        st.success(success)
    else:
        st.error(result.message)


def summary_dataframe(session: MarinaSession) -> pd.DataFrame:
    summary = billing_summary(session.store)
    return pd.DataFrame(
        [{"location": item.kind.value, "boats": item.boats, "owed": round(item.owed, 2)} for item in summary.by_kind],
        columns=["location", "boats", "owed"],
    )


with st.sidebar:
    data_path = st.text_input("Data file", value=str(Path.cwd() / "BoatData.csv"))
    if st.button("Open", key="open_btn"):
        st.session_state["session"] = open_session(data_path)
        st.session_state["path"] = data_path

session: MarinaSession | None = st.session_state.get("session")
if session is None:
    st.info("Choose a data file and press Open to load the inventory.")
    st.stop()

st.caption(f"Editing {st.session_state['path']}")

tabs = st.tabs(["Add", "Remove", "Payment", "Month"])
with tabs[0]:
    with st.form("add_form", clear_on_submit=True):
        record = st.text_input("Boat data (name,length,location,detail,owed)", placeholder="Brooks,34,trailer,AAR666,99.00")
        if st.form_submit_button("Add"):
            show_result(session.execute(AddBoat(record)), "Boat added")
with tabs[1]:
    with st.form("remove_form", clear_on_submit=True):
        name = st.text_input("Boat name", key="remove_name")
        if st.form_submit_button("Remove"):
            show_result(session.execute(RemoveBoat(name)), f"Removed {name}")
with tabs[2]:
    with st.form("payment_form", clear_on_submit=True):
        name = st.text_input("Boat name", key="payment_name")
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        if st.form_submit_button("Accept payment"):
            show_result(session.execute(AcceptPayment(name, float(amount))), f"Payment accepted from {name}")
with tabs[3]:
    if st.button("Apply monthly charges", key="monthly_btn"):
        show_result(session.execute(ApplyMonthlyCharge()), "Monthly charges applied")

st.subheader("Inventory")
st.dataframe(boats_to_dataframe(session.store), hide_index=True, use_container_width=True)
summary = billing_summary(session.store)
col_count, col_total = st.columns(2)
col_count.metric("Boats", summary.total_boats)
col_total.metric("Total owed", f"${summary.total_owed:,.2f}")
st.dataframe(summary_dataframe(session), hide_index=True)

col_save, col_csv, col_html, col_xlsx = st.columns(4)
with col_save:
    if st.button("Save", key="save_btn"):
        show_result(session.save(), "Saved")
boats = tuple(session.store)
with col_csv:
    st.download_button("Download CSV", data=render_csv(boats), file_name="inventory.csv", mime="text/csv")
with col_html:
    st.download_button(
        "Download HTML",
        data=render_html(boats).encode("utf-8"),
        file_name="inventory.html",
        mime="text/html",
    )
with col_xlsx:
    st.download_button(
        "Download Excel",
        data=render_xlsx(boats),
        file_name="inventory.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
