"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if len(self.value) > MAX_VALUE_LENGTH:
            raise ValueError(f"TLV value for tag {self.tag} exceeds {MAX_VALUE_LENGTH} characters")
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


@dataclass(frozen=True)
class TLVScan:
    """Result of a best-effort scan.

    ``truncated`` is set when characters were left unconsumed, either because a
    length field was not decimal or because it claimed more data than remained.
    """

    items: tuple[TLVItem, ...]
    truncated: bool


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def _iter_tlv(payload: str) -> Iterator[tuple[TLVItem, int]]:
    idx = 0
    total = len(payload)
    while idx + 4 <= total:
        tag = payload[idx : idx + 2]
        length_field = payload[idx + 2 : idx + 4]
        if not (length_field.isascii() and length_field.isdigit()):
            return
        value_start = idx + 4
        value_end = value_start + int(length_field)
        if value_end > total:
            return
        idx = value_end
        yield TLVItem(tag=tag, value=payload[value_start:value_end]), idx


def scan_tlv(payload: str) -> TLVScan:
    """Scan a TLV string, stopping silently at the first malformed or truncated entry."""

    items: list[TLVItem] = []
    consumed = 0
    for item, consumed in _iter_tlv(payload):
        items.append(item)
    return TLVScan(items=tuple(items), truncated=consumed != len(payload))


def parse_tlv(payload: str) -> list[TLVItem]:
    """Parse TLV payload string into TLV items, dropping a malformed tail."""

    return [item for item, _ in _iter_tlv(payload)]
