"""Classification of uploaded PromptPay QR payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..emvco_encoder import MAX_PAYLOAD_LENGTH
from ..monitoring import record_promptpay_id
from ..promptpay import format_promptpay_id
from ..promptpay_parser import PromptPayId, extract_promptpay_id
from ..renderer import generate_promptpay_qr_url
from ..validation import is_valid_emvco_payload
from .errors import err_not_promptpay, err_payload_too_large

logger = logging.getLogger("promptqr.scan")


@dataclass(slots=True)
class ScanResult:
    promptpay: PromptPayId
    display_id: str
    qr_url: str | None


class ScanService:
    """Recognise the PromptPay payee behind a payload decoded from an uploaded QR image."""

    def __init__(self, render_base_url: str | None = None):
        self.render_base_url = render_base_url

    def handle_scan(self, payload: str) -> ScanResult:
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise err_payload_too_large()
        if not is_valid_emvco_payload(payload):
            logger.info("payload rejected by structural check", extra={"payload_length": len(payload)})
            raise err_not_promptpay()

        promptpay = extract_promptpay_id(payload)
        if promptpay is None:
            logger.info("no promptpay block found", extra={"payload_length": len(payload)})
            raise err_not_promptpay()

        record_promptpay_id(promptpay.kind.value)
        qr_url = None
        if promptpay.qr_compatible:
            qr_url = generate_promptpay_qr_url(promptpay.id, base_url=self.render_base_url)
        logger.info(
            "promptpay id recognised",
            extra={"kind": promptpay.kind.value, "qr_compatible": promptpay.qr_compatible},
        )
        return ScanResult(promptpay=promptpay, display_id=format_promptpay_id(promptpay.id), qr_url=qr_url)
