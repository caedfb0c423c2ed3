"""Shared parsing utilities for the boat text format."""
from __future__ import annotations

import math
import re
from io import StringIO
from pathlib import Path

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def ensure_text(source: StringIO | Path | str, encoding: str = "utf-8") -> str:
    if isinstance(source, str):
        return source
    if isinstance(source, StringIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_text(encoding=encoding)
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def parse_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_leading_int(value: str) -> int:
    """Read the leading integer of ``value`` the way C ``atoi`` does; 0 if there is none."""
    match = _LEADING_INT.match(value)
    if not match:
        return 0
    return int(match.group(1))


def parse_amount(value: str) -> float | None:
    try:
        amount = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount
