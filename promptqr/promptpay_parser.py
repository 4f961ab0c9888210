"""PromptPay identifier extraction from EMVCo merchant-presented payloads.

PromptPay credit transfer blocks live in the merchant account range (tags
26-51) and carry the AID ``A000000677010111`` in sub-tag 00. The payee is one
of:

* sub-tag 01: mobile number, ``0066XXXXXXXXX`` or local ``0XXXXXXXXX``
* sub-tag 02: national ID, 13 digits
* sub-tag 03: bank e-wallet reference, 15 digits

Bill payment blocks (AID ``A000000677010112``) hold biller IDs, not payees,
and are skipped.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .tlv import TLVItem, parse_tlv

PROMPTPAY_CREDIT_AID = "A000000677010111"
BILL_PAYMENT_AID = "A000000677010112"

MERCHANT_ACCOUNT_TAGS = range(26, 52)
MIN_PAYLOAD_LENGTH = 20

_INTL_PHONE_RE = re.compile(r"0066\d{9}")
_LOCAL_PHONE_RE = re.compile(r"0\d{9}")
_NATIONAL_ID_RE = re.compile(r"\d{13}")
_EWALLET_RE = re.compile(r"\d{15}")


class PromptPayIdKind(str, enum.Enum):
    PHONE = "phone"
    NATIONAL_ID = "national_id"
    EWALLET = "ewallet"


@dataclass(frozen=True)
class PromptPayId:
    id: str
    kind: PromptPayIdKind
    qr_compatible: bool


def _sub_value(entries: list[TLVItem], tag: str) -> str | None:
    for entry in entries:
        if entry.tag == tag:
            return entry.value
    return None


def _is_merchant_account_tag(tag: str) -> bool:
    return tag.isascii() and tag.isdigit() and int(tag) in MERCHANT_ACCOUNT_TAGS


def _classify(entries: list[TLVItem]) -> PromptPayId | None:
    # Priority is fixed: 01 (phone), then 02 (national ID), then 03 (e-wallet).
    phone = _sub_value(entries, "01")
    if phone:
        if _INTL_PHONE_RE.fullmatch(phone):
            return PromptPayId(id="0" + phone[4:], kind=PromptPayIdKind.PHONE, qr_compatible=True)
        if _LOCAL_PHONE_RE.fullmatch(phone):
            return PromptPayId(id=phone, kind=PromptPayIdKind.PHONE, qr_compatible=True)

    national_id = _sub_value(entries, "02")
    if national_id and _NATIONAL_ID_RE.fullmatch(national_id):
        return PromptPayId(id=national_id, kind=PromptPayIdKind.NATIONAL_ID, qr_compatible=True)

    # promptpay.io cannot render e-wallet references.
    ewallet = _sub_value(entries, "03")
    if ewallet and _EWALLET_RE.fullmatch(ewallet):
        return PromptPayId(id=ewallet, kind=PromptPayIdKind.EWALLET, qr_compatible=False)

    return None


def extract_promptpay_id(payload: str | None) -> PromptPayId | None:
    """Return the PromptPay payee identifier embedded in ``payload``.

    ``None`` means the payload is not a PromptPay credit transfer code, which
    is an ordinary outcome (an unrelated QR image, a bill payment QR, ...).
    """

    if not payload or len(payload) < MIN_PAYLOAD_LENGTH:
        return None

    for entry in parse_tlv(payload):
        if not _is_merchant_account_tag(entry.tag):
            continue
        sub_entries = parse_tlv(entry.value)
        if _sub_value(sub_entries, "00") != PROMPTPAY_CREDIT_AID:
            continue
        found = _classify(sub_entries)
        if found is not None:
            return found
    return None
