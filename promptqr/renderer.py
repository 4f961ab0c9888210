"""URL builder for the external PromptPay QR image renderer."""
from __future__ import annotations

from decimal import Decimal
from typing import Union

from .config import settings
from .promptpay import can_generate_promptpay_qr, clean_promptpay_id


def _format_url_amount(amount: Union[int, float, Decimal]) -> str:
    text = format(Decimal(str(amount)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def generate_promptpay_qr_url(
    promptpay_id: str,
    amount: Union[int, float, Decimal, None] = None,
    base_url: str | None = None,
) -> str:
    """Return ``{base}/{id}.png`` or ``{base}/{id}/{amount}.png``.

    The amount segment is only added for positive amounts. E-wallet references
    are rejected because the renderer cannot encode them.
    """

    if not can_generate_promptpay_qr(promptpay_id):
        raise ValueError("PromptPay ID cannot be rendered as a QR image")

    base = (base_url or settings.render_base_url).rstrip("/")
    clean_id = clean_promptpay_id(promptpay_id)
    if amount and amount > 0:
        return f"{base}/{clean_id}/{_format_url_amount(amount)}.png"
    return f"{base}/{clean_id}.png"
