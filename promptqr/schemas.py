"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from .promptpay_parser import PromptPayIdKind


class PayloadRequest(BaseModel):
    payload: str = Field(description="EMVCo payload text decoded from a QR image")


class GenerateQRRequest(PayloadRequest):
    amount: Decimal = Field(description="Transaction amount in THB")


class PromptPayIdentity(BaseModel):
    promptpay_id: str
    kind: PromptPayIdKind
    qr_compatible: bool


class ScanResponse(PromptPayIdentity):
    display_id: str
    qr_url: str | None = None


class GenerateQRResponse(PromptPayIdentity):
    payload: str
    crc: str
    qr_url: str | None = None
    bank_transfer_fallback: bool


class TLVEntry(BaseModel):
    tag: str
    value: str


class ValidateResponse(BaseModel):
    structurally_valid: bool
    crc_valid: bool
    truncated: bool
    entries: list[TLVEntry]


class ErrorResponse(BaseModel):
    code: str
    message: str
