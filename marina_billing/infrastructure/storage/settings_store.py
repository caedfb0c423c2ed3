"""Storage helpers for the JSON settings override file."""
from __future__ import annotations

from pathlib import Path
import json
import logging
from typing import Any

from marina_billing.domain.models import LocationKind

DEFAULT_PATH = Path(__file__).resolve().parents[3] / "marina_settings.json"

_LOG = logging.getLogger(__name__)


def _normalize_rates(raw: Any) -> dict[str, float]:
    rates: dict[str, float] = {}
    if not isinstance(raw, dict):
        return rates
    known = {kind.value for kind in LocationKind}
    for key, value in raw.items():
        key_str = str(key).strip().lower()
        if key_str == "trailor":
            key_str = LocationKind.TRAILER.value
        if key_str not in known:
            continue
        try:
            rates[key_str] = float(value)
        except (TypeError, ValueError):
            continue
    return rates


def _normalize_overrides(raw: dict[str, Any] | None) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    if not isinstance(raw, dict):
        return normalized
    for key, value in raw.items():
        if key is None:
            continue
        key_str = str(key).strip().lower()
        if key_str == "capacity":
            if value is None:
                normalized[key_str] = None
            elif isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                normalized[key_str] = value
        elif key_str == "monthly_rates":
            rates = _normalize_rates(value)
            if rates:
                normalized[key_str] = rates
        elif key_str == "parse_mode":
            mode = str(value).strip().lower()
            if mode in {"legacy", "strict"}:
                normalized[key_str] = mode
        elif key_str == "autosave":
            if isinstance(value, bool):
                normalized[key_str] = value
        elif key_str == "log_level":
            normalized[key_str] = str(value).strip().upper()
        elif key_str == "log_file":
            normalized[key_str] = None if value in (None, "") else str(value)
    return normalized


def load_overrides(path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    if not override_path.exists():
        return {}
    try:
        data = json.loads(override_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        _LOG.warning("Ignoring malformed settings file %s", override_path)
        return {}
    return _normalize_overrides(data)


def save_overrides(overrides: dict[str, Any], path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    normalized = _normalize_overrides(overrides)
    override_path.write_text(
        json.dumps(normalized, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return normalized
