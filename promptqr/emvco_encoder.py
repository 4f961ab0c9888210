"""EMVCo payload encoder that turns a static PromptPay QR into a dynamic one.

Key tags:
    00 = Payload Format Indicator ("01")
    01 = Point of Initiation Method ("11" static, "12" dynamic/one-time)
    26-51 = Merchant Account Information
    53 = Transaction Currency ("764" = THB)
    54 = Transaction Amount ("100.00")
    58 = Country Code ("TH")
    63 = CRC-16/CCITT-FALSE, 4 hex characters
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Union

from .crc import crc16_ccitt
from .errors import InvalidAmountError, InvalidPayloadSizeError
from .tlv import TLVItem, build_tlv, parse_tlv

MAX_AMOUNT = Decimal("999999.99")
MAX_PAYLOAD_LENGTH = 1000

TAG_POINT_OF_INITIATION = "01"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"
TAG_CRC = "63"

POI_DYNAMIC = "12"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"
CRC_HEADER = f"{TAG_CRC}04"

Amount = Union[int, float, Decimal]


def _validate_amount(amount: Amount) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise InvalidAmountError(f"Invalid amount for QR generation: {amount!r}")
    if isinstance(amount, Decimal):
        finite = amount.is_finite()
    else:
        finite = math.isfinite(amount)
    if not finite:
        raise InvalidAmountError(f"Invalid amount for QR generation: {amount!r}")
    value = Decimal(amount)
    if value <= 0 or value > MAX_AMOUNT:
        raise InvalidAmountError(f"Invalid amount for QR generation: {amount!r}")
    return value


def format_amount(amount: Decimal) -> str:
    """Format with exactly two decimals, no thousands separator."""

    return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _find(items: Sequence[TLVItem], tag: str) -> int:
    for idx, item in enumerate(items):
        if item.tag == tag:
            return idx
    return -1


def _rewrite(items: Sequence[TLVItem], amount_value: str) -> tuple[TLVItem, ...]:
    rewritten: list[TLVItem] = []
    for item in items:
        if item.tag == TAG_CRC:
            continue
        if item.tag == TAG_POINT_OF_INITIATION:
            rewritten.append(TLVItem(tag=TAG_POINT_OF_INITIATION, value=POI_DYNAMIC))
        elif item.tag == TAG_AMOUNT:
            rewritten.append(TLVItem(tag=TAG_AMOUNT, value=amount_value))
        else:
            rewritten.append(item)
    return tuple(rewritten)


def _ensure_amount(items: tuple[TLVItem, ...], amount_value: str) -> tuple[TLVItem, ...]:
    if _find(items, TAG_AMOUNT) >= 0:
        return items
    currency_idx = _find(items, TAG_CURRENCY)
    insert_at = currency_idx + 1 if currency_idx >= 0 else len(items)
    return items[:insert_at] + (TLVItem(tag=TAG_AMOUNT, value=amount_value),) + items[insert_at:]


def _ensure_currency(items: tuple[TLVItem, ...]) -> tuple[TLVItem, ...]:
    if _find(items, TAG_CURRENCY) >= 0:
        return items
    amount_idx = _find(items, TAG_AMOUNT)
    return items[:amount_idx] + (TLVItem(tag=TAG_CURRENCY, value=CURRENCY_THB),) + items[amount_idx:]


def _ensure_country(items: tuple[TLVItem, ...]) -> tuple[TLVItem, ...]:
    if _find(items, TAG_COUNTRY) >= 0:
        return items
    return items + (TLVItem(tag=TAG_COUNTRY, value=COUNTRY_TH),)


def finalize_payload(items: Sequence[TLVItem]) -> str:
    """Serialize items and append the Tag 63 CRC computed over the ``6304`` header."""

    payload_no_crc = f"{build_tlv(items)}{CRC_HEADER}"
    return f"{payload_no_crc}{crc16_ccitt(payload_no_crc)}"


def inject_amount(payload: str, amount: Amount) -> str:
    """Inject a THB transaction amount into an EMVCo payload.

    Tag 01 becomes "12", Tag 54 is added or replaced, Tag 53/58 are filled in
    when missing and Tag 63 is recomputed. A string that does not scan as TLV
    at all is returned unchanged.

    Raises:
        InvalidAmountError: amount is not finite, not positive or above 999999.99.
        InvalidPayloadSizeError: payload is empty or longer than 1000 characters.
    """

    amount_value = format_amount(_validate_amount(amount))

    if not payload or len(payload) > MAX_PAYLOAD_LENGTH:
        raise InvalidPayloadSizeError("Invalid EMVCo payload size")

    items = parse_tlv(payload)
    if not items:
        return payload

    rewritten = _ensure_country(_ensure_currency(_ensure_amount(_rewrite(items, amount_value), amount_value)))
    return finalize_payload(rewritten)
