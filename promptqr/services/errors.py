"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


def err_not_promptpay(message: str | None = None) -> ServiceError:
    return ServiceError(
        code="ERR_NOT_PROMPTPAY",
        message=message or "This does not appear to be a PromptPay QR code",
        status_code=422,
    )


def err_payload_too_large(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_PAYLOAD_SIZE", message=message or "QR payload is too large", status_code=413)


def err_encode_failed(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_ENCODE_FAILED", message=message or "Could not build a payment QR payload", status_code=500)
