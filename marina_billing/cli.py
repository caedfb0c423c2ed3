"""Command-line entrypoint: the interactive marina menu."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn, TextIO

from marina_billing.application.dto import (
    AcceptPayment,
    AddBoat,
    ApplyMonthlyCharge,
    Exit,
    ListInventory,
    RemoveBoat,
    Request,
)
from marina_billing.application.use_cases import MarinaContext, MarinaSession
from marina_billing.config import Settings, init_logging, load_settings
from marina_billing.domain.results import CommandResult, Outcome
from marina_billing.domain.services import BillingService
from marina_billing.infrastructure.parsing.boat_csv import ParseMode
from marina_billing.infrastructure.parsing.utils import parse_amount
from marina_billing.infrastructure.repositories.text_repository import TextFileBoatRepository, load_store
from marina_billing.presentation.inventory_report import render_csv, render_html, render_xlsx

MENU_PROMPT = "(I)nventory, (A)dd, (R)emove, (P)ayment, (M)onth, e(X)it : "
RECORD_PROMPT = "Please enter the boat data in CSV format                 : "
NAME_PROMPT = "Please enter the boat name                               : "
AMOUNT_PROMPT = "Please enter the amount to be paid                       : "

_LOG = logging.getLogger(__name__)


class MarinaShell:
    """Reads menu letters and their arguments, and prints command outcomes."""

    def __init__(self, session: MarinaSession, stdin: TextIO, stdout: TextIO) -> None:
        self._session = session
        self._stdin = stdin
        self._stdout = stdout

    def _write(self, text: str) -> None:
        self._stdout.write(text)

    def _prompt(self, prompt: str) -> str | None:
        self._write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def read_request(self, command: str) -> Request | None:
        """Map a menu letter to a request, prompting for any input it needs.

        Returns ``None`` when input ran out or was rejected before reaching
        the core (the reason has already been printed).
        """
        letter = command[0].lower()
        if letter == "i":
            return ListInventory()
        if letter == "m":
            return ApplyMonthlyCharge()
        if letter == "x":
            return Exit()
        if letter == "a":
            record = self._prompt(RECORD_PROMPT)
            return None if record is None else AddBoat(record)
        if letter == "r":
            name = self._prompt(NAME_PROMPT)
            return None if name is None else RemoveBoat(name)
        if letter == "p":
            name = self._prompt(NAME_PROMPT)
            if name is None:
                return None
            if self._session.store.find_by_name(name) is None:
                self._write("No boat with that name\n")
                return None
            raw_amount = self._prompt(AMOUNT_PROMPT)
            if raw_amount is None:
                return None
            amount = parse_amount(raw_amount)
            if amount is None:
                self._write("Invalid amount\n")
                return None
            return AcceptPayment(name, amount)
        self._write(f"Invalid option {command}\n")
        return None

    def report(self, result: CommandResult) -> None:
        if result.rows is not None:
            for row in result.rows:
                self._write(row + "\n")
        elif result.outcome is Outcome.RESOURCE_UNAVAILABLE:
            sys.stderr.write(result.message + "\n")
        elif not result.ok:
            self._write(result.message + "\n")

    def run(self) -> int:
        self._write("\nWelcome to the Boat Management System\n")
        self._write("-------------------------------------\n\n")
        while True:
            command = self._prompt(MENU_PROMPT)
            if command is None:
                break
            if not command:
                continue
            request = self.read_request(command)
            if isinstance(request, Exit):
                self._write("\nExiting the Boat Management System\n\n")
                break
            if request is not None:
                self.report(self._session.execute(request))
            self._write("\n")

        self.report(self._session.execute(Exit()))
        return 0


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _capacity(value: str) -> int:
    try:
        capacity = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid capacity: {value!r}") from None
    if capacity < 0:
        raise argparse.ArgumentTypeError(f"capacity must be non-negative, got {capacity}")
    return capacity


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="marina-billing", description="Manage marina boats and their balances")
    parser.add_argument("datafile", nargs="?", type=str, help="Path to the boat data file (created on exit if missing)")
    parser.add_argument("--config", type=Path, help="JSON settings override file")
    parser.add_argument("--capacity", type=_capacity, help="Maximum number of boats (0 for no limit)")
    parser.add_argument("--strict", action="store_true", help="Reject records with unknown locations or bad numbers")
    parser.add_argument("--autosave", action="store_true", help="Save the data file after every change")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--export", type=Path, help="Write the inventory to a .csv, .html or .xlsx file and exit")
    return parser


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.capacity is not None:
        settings = replace(settings, capacity=args.capacity or None)
    if args.strict:
        settings = replace(settings, parse_mode=ParseMode.STRICT)
    if args.autosave:
        settings = replace(settings, autosave=True)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())
    return settings


def export_inventory(session: MarinaSession, target: Path) -> None:
    boats = tuple(session.store)
    suffix = target.suffix.lower()
    if suffix == ".html":
        target.write_text(render_html(boats), encoding="utf-8")
    elif suffix == ".xlsx":
        target.write_bytes(render_xlsx(boats))
    else:
        target.write_bytes(render_csv(boats))
    _LOG.info("Exported %d boat(s) to %s", len(boats), target)


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if not args.datafile:
        sys.stderr.write(f"Usage: {parser.prog} <BoatData.csv>\n")
        return 1

    settings = apply_arguments(load_settings(args.config), args)
    init_logging(settings)

    repository = TextFileBoatRepository(args.datafile, mode=settings.parse_mode)
    context = MarinaContext(
        store=load_store(repository, capacity=settings.capacity),
        repository=repository,
        billing=BillingService(settings.monthly_rates),
        parse_mode=settings.parse_mode,
        autosave=settings.autosave,
    )
    session = MarinaSession(context)

    if args.export:
        export_inventory(session, args.export)
        return 0

    shell = MarinaShell(session, stdin or sys.stdin, stdout or sys.stdout)
    return shell.run()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
