"""CRC-16/CCITT-FALSE implementation."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str) -> str:
    """Compute CRC-16/CCITT-FALSE (poly 0x1021, init 0xFFFF) for EMV payload strings.

    Each character's code point is fed as one input byte; payloads are ASCII.
    """

    checksum = CRC16_INIT
    for ch in data:
        checksum = (checksum ^ (ord(ch) << 8)) & 0xFFFF
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return f"{checksum:04X}"
