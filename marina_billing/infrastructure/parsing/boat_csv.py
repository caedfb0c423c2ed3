"""Line codec for the comma-delimited boat data file.

Each line holds five fields in fixed order::

    name,length,kind,detail,amount_owed

for example ``Big Brother,20,slip,27,1450.00``. There is no header row and no
escaping, so names cannot contain commas.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Iterator

from marina_billing.domain.errors import ParseFailure
from marina_billing.domain.models import (
    MAX_NAME_LENGTH,
    MAX_TAG_LENGTH,
    Boat,
    LandLocation,
    LocationDetail,
    LocationKind,
    SlipLocation,
    StorageLocation,
    TrailerLocation,
)
from marina_billing.infrastructure.parsing.utils import (
    parse_amount,
    parse_int,
    parse_leading_int,
)

DELIMITER = ","
FIELD_COUNT = 5

# "trailor" is the spelling written by older data files
KIND_NAMES = {
    "slip": LocationKind.SLIP,
    "land": LocationKind.LAND,
    "trailer": LocationKind.TRAILER,
    "trailor": LocationKind.TRAILER,
    "storage": LocationKind.STORAGE,
}

_LOG = logging.getLogger(__name__)


class ParseMode(str, Enum):
    """How forgiving the decoder is about location fields.

    ``LEGACY`` keeps the historical fallbacks: an unknown location name is read
    as a slip and a non-numeric slip or storage number is read as 0.
    ``STRICT`` rejects such lines instead.
    """

    LEGACY = "legacy"
    STRICT = "strict"


def parse_kind(token: str, mode: ParseMode = ParseMode.LEGACY) -> LocationKind:
    kind = KIND_NAMES.get(token.strip().lower())
    if kind is not None:
        return kind
    if mode is ParseMode.STRICT:
        raise ParseFailure(token, "unknown location type")
    _LOG.debug("Unknown location type %r read as slip", token)
    return LocationKind.SLIP


def _parse_number(token: str, mode: ParseMode) -> int:
    if mode is ParseMode.LEGACY:
        return parse_leading_int(token)
    number = parse_int(token)
    if number is None or number < 0:
        raise ParseFailure(token, "location number must be a non-negative integer")
    return number


def parse_location(kind: LocationKind, token: str, mode: ParseMode = ParseMode.LEGACY) -> LocationDetail:
    """Build the location variant for ``kind`` from its raw detail token."""
    if kind is LocationKind.SLIP:
        return SlipLocation(number=_parse_number(token, mode))
    if kind is LocationKind.LAND:
        if not token:
            raise ParseFailure(token, "missing bay letter")
        return LandLocation(bay=token[0])
    if kind is LocationKind.TRAILER:
        return TrailerLocation(tag=token[:MAX_TAG_LENGTH])
    return StorageLocation(slot=_parse_number(token, mode))


def decode_line(line: str, mode: ParseMode = ParseMode.LEGACY) -> Boat:
    """Parse one record; raises :class:`ParseFailure` when the line is malformed."""
    text = line.rstrip("\r\n")
    fields = text.split(DELIMITER)
    if len(fields) != FIELD_COUNT:
        raise ParseFailure(line, f"expected {FIELD_COUNT} fields, found {len(fields)}")
    raw_name, raw_length, raw_kind, raw_detail, raw_amount = fields

    name = raw_name.lstrip()
    if not name:
        raise ParseFailure(line, "missing boat name")

    length = parse_int(raw_length)
    if length is None:
        raise ParseFailure(line, "length is not an integer")

    if not raw_detail:
        raise ParseFailure(line, "missing location detail")

    amount = parse_amount(raw_amount)
    if amount is None:
        raise ParseFailure(line, "amount owed is not a number")

    kind = parse_kind(raw_kind, mode)
    try:
        location = parse_location(kind, raw_detail, mode)
    except ParseFailure as exc:
        raise ParseFailure(line, exc.reason) from exc

    return Boat(
        name=name[:MAX_NAME_LENGTH],
        length=length,
        location=location,
        amount_owed=amount,
    )


def encode_boat(boat: Boat) -> str:
    return DELIMITER.join(
        [
            boat.name,
            str(boat.length),
            boat.kind.value,
            boat.location.token(),
            f"{boat.amount_owed:.2f}",
        ]
    )


def decode_lines(lines: Iterable[str], mode: ParseMode = ParseMode.LEGACY) -> Iterator[Boat]:
    """Yield every decodable record, skipping malformed and blank lines."""
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield decode_line(line, mode)
        except ParseFailure as exc:
            _LOG.info("Skipping line %d: %s", number, exc)
