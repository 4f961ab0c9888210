"""Dynamic payment QR payload generation for checkout."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from ..emvco_encoder import MAX_PAYLOAD_LENGTH, inject_amount
from ..monitoring import record_payment_qr
from ..promptpay_parser import PromptPayId, extract_promptpay_id
from ..renderer import generate_promptpay_qr_url
from ..tlv import parse_tlv
from ..validation import is_valid_emvco_payload
from .errors import err_encode_failed, err_not_promptpay, err_payload_too_large

logger = logging.getLogger("promptqr.generator")


@dataclass(slots=True)
class GenerateResult:
    payload: str
    crc: str
    promptpay: PromptPayId
    qr_url: str | None
    bank_transfer_fallback: bool


class PaymentQRGenerator:
    def __init__(self, render_base_url: str | None = None):
        self.render_base_url = render_base_url

    def create_payment_qr(self, *, merchant_payload: str, amount: Union[int, float, Decimal]) -> GenerateResult:
        """Turn the merchant's static PromptPay payload into a one-time payment payload.

        Invalid amounts propagate as ``InvalidAmountError`` from the encoder.
        """

        if len(merchant_payload) > MAX_PAYLOAD_LENGTH:
            raise err_payload_too_large()
        if not is_valid_emvco_payload(merchant_payload):
            record_payment_qr("rejected")
            raise err_not_promptpay()

        promptpay = extract_promptpay_id(merchant_payload)
        if promptpay is None:
            record_payment_qr("rejected")
            raise err_not_promptpay()

        payload = inject_amount(merchant_payload, amount)
        if not is_valid_emvco_payload(payload):
            logger.error("encoded payload failed structural check", extra={"payload_length": len(payload)})
            record_payment_qr("failed")
            raise err_encode_failed()

        qr_url = None
        if promptpay.qr_compatible:
            # Render the amount exactly as encoded in Tag 54.
            encoded_amount = next(item.value for item in parse_tlv(payload) if item.tag == "54")
            qr_url = generate_promptpay_qr_url(promptpay.id, Decimal(encoded_amount), base_url=self.render_base_url)
            record_payment_qr("rendered")
        else:
            record_payment_qr("bank_transfer")

        logger.info(
            "payment qr payload created",
            extra={"kind": promptpay.kind.value, "qr_compatible": promptpay.qr_compatible},
        )
        return GenerateResult(
            payload=payload,
            crc=payload[-4:],
            promptpay=promptpay,
            qr_url=qr_url,
            bank_transfer_fallback=not promptpay.qr_compatible,
        )
