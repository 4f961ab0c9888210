from __future__ import annotations

import pytest

from promptqr.crc import crc16_ccitt
from promptqr.tlv import TLVItem, build_tlv

PROMPTPAY_AID = "A000000677010111"


def merchant_block(*sub_items: tuple[str, str], aid: str = PROMPTPAY_AID) -> str:
    return build_tlv([TLVItem("00", aid), *(TLVItem(tag, value) for tag, value in sub_items)])


def make_payload(*items: tuple[str, str]) -> str:
    body = build_tlv(TLVItem(tag, value) for tag, value in items) + "6304"
    return body + crc16_ccitt(body)


def static_payload(*sub_items: tuple[str, str], tag: str = "29") -> str:
    return make_payload(
        ("00", "01"),
        ("01", "11"),
        (tag, merchant_block(*sub_items)),
        ("53", "764"),
        ("58", "TH"),
    )


@pytest.fixture()
def phone_payload() -> str:
    return static_payload(("01", "0066812345678"))


@pytest.fixture()
def national_id_payload() -> str:
    return static_payload(("02", "1234567890123"))


@pytest.fixture()
def ewallet_payload() -> str:
    return static_payload(("03", "123456789012345"))
