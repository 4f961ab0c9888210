"""Cheap structural checks for EMVCo payload strings."""
from __future__ import annotations

import re

from .crc import crc16_ccitt

MIN_PAYLOAD_LENGTH = 20
PAYLOAD_FORMAT_PREFIX = "0002"

_CRC_TRAILER_RE = re.compile(r"6304[0-9A-Fa-f]{4}\Z")


def is_valid_emvco_payload(payload: str | None) -> bool:
    """Check that ``payload`` starts with Tag 00 and ends with a Tag 63 CRC.

    The TLV body is not scanned.
    """

    if not payload or len(payload) < MIN_PAYLOAD_LENGTH:
        return False
    if not payload.startswith(PAYLOAD_FORMAT_PREFIX):
        return False
    return _CRC_TRAILER_RE.search(payload) is not None


def has_valid_crc(payload: str | None) -> bool:
    """Structural check plus verification of the trailing checksum."""

    if not is_valid_emvco_payload(payload):
        return False
    return payload[-4:].upper() == crc16_ccitt(payload[:-4])
