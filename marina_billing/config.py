"""Central configuration for the marina billing package."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from marina_billing.domain.models import LocationKind
from marina_billing.domain.services import DEFAULT_MONTHLY_RATES
from marina_billing.domain.store import DEFAULT_CAPACITY
from marina_billing.infrastructure.parsing.boat_csv import ParseMode
from marina_billing.infrastructure.storage.settings_store import load_overrides

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Settings:
    capacity: int | None = DEFAULT_CAPACITY
    monthly_rates: Mapping[LocationKind, float] = field(default_factory=lambda: dict(DEFAULT_MONTHLY_RATES))
    parse_mode: ParseMode = ParseMode.LEGACY
    autosave: bool = False
    log_level: str = "WARNING"
    log_file: Path | None = None


def build_settings(overrides: Mapping[str, Any] | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Combine defaults, file overrides and ``MARINA_*`` environment variables."""
    overrides = overrides or {}
    environ = os.environ if environ is None else environ

    rates = dict(DEFAULT_MONTHLY_RATES)
    for kind_name, rate in overrides.get("monthly_rates", {}).items():
        rates[LocationKind(kind_name)] = rate

    settings = Settings(
        capacity=overrides.get("capacity", DEFAULT_CAPACITY) or None,
        monthly_rates=rates,
        parse_mode=ParseMode(overrides.get("parse_mode", ParseMode.LEGACY.value)),
        autosave=overrides.get("autosave", False),
        log_level=overrides.get("log_level", "WARNING"),
        log_file=Path(overrides["log_file"]) if overrides.get("log_file") else None,
    )

    if environ.get("MARINA_LOG_LEVEL"):
        settings = replace(settings, log_level=environ["MARINA_LOG_LEVEL"].strip().upper())
    capacity = environ.get("MARINA_CAPACITY", "").strip()
    if capacity.isdigit():
        settings = replace(settings, capacity=int(capacity) or None)
    return settings


def load_settings(path: Path | None = None) -> Settings:
    return build_settings(load_overrides(path))


def init_logging(settings: Settings) -> None:
    """Configure the root logger once: stderr plus an optional log file."""
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.WARNING))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


SETTINGS = load_settings()
