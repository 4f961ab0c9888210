"""PromptPay identifier helpers for display and render eligibility."""
from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[-\s]")
_PHONE_RE = re.compile(r"0\d{9}")
_NATIONAL_ID_RE = re.compile(r"\d{13}")
_EWALLET_RE = re.compile(r"\d{15}")


def clean_promptpay_id(promptpay_id: str) -> str:
    return _SEPARATORS_RE.sub("", promptpay_id)


def is_valid_promptpay_id(promptpay_id: str) -> bool:
    """Phone (0XXXXXXXXX), national ID (13 digits) or e-wallet (15 digits)."""

    clean_id = clean_promptpay_id(promptpay_id)
    return any(pattern.fullmatch(clean_id) for pattern in (_PHONE_RE, _NATIONAL_ID_RE, _EWALLET_RE))


def can_generate_promptpay_qr(promptpay_id: str) -> bool:
    """Only phones and national IDs can be rendered by the QR image service."""

    clean_id = clean_promptpay_id(promptpay_id)
    return bool(_PHONE_RE.fullmatch(clean_id) or _NATIONAL_ID_RE.fullmatch(clean_id))


def format_promptpay_id(promptpay_id: str) -> str:
    clean_id = clean_promptpay_id(promptpay_id)
    if len(clean_id) == 10:
        return f"{clean_id[:3]}-{clean_id[3:6]}-{clean_id[6:]}"
    if len(clean_id) == 13:
        return f"{clean_id[:1]}-{clean_id[1:5]}-{clean_id[5:10]}-{clean_id[10:12]}-{clean_id[12:]}"
    return clean_id
