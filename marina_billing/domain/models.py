"""Domain models for the marina billing system.

A boat's location is a closed set of variants; each variant carries only the
payload that makes sense for it, and the variant itself determines the kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

MAX_NAME_LENGTH = 127
MAX_TAG_LENGTH = 31


class LocationKind(str, Enum):
    SLIP = "slip"
    LAND = "land"
    TRAILER = "trailer"
    STORAGE = "storage"


@dataclass(frozen=True)
class SlipLocation:
    number: int

    @property
    def kind(self) -> LocationKind:
        return LocationKind.SLIP

    def token(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class LandLocation:
    """Dry storage on land, identified by a single bay letter."""

    bay: str

    @property
    def kind(self) -> LocationKind:
        return LocationKind.LAND

    def token(self) -> str:
        return self.bay


@dataclass(frozen=True)
class TrailerLocation:
    tag: str

    @property
    def kind(self) -> LocationKind:
        return LocationKind.TRAILER

    def token(self) -> str:
        return self.tag


@dataclass(frozen=True)
class StorageLocation:
    slot: int

    @property
    def kind(self) -> LocationKind:
        return LocationKind.STORAGE

    def token(self) -> str:
        return str(self.slot)


LocationDetail = Union[SlipLocation, LandLocation, TrailerLocation, StorageLocation]


@dataclass(frozen=True)
class Boat:
    """A vessel under management together with its billing state."""

    name: str
    length: int
    location: LocationDetail
    amount_owed: float

    @property
    def kind(self) -> LocationKind:
        return self.location.kind

    def sort_key(self) -> str:
        return self.name.lower()

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()
