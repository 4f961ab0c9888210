"""Caller-input errors raised by the payload codec."""
from __future__ import annotations


class CodecError(ValueError):
    code = "ERR_CODEC"


class InvalidAmountError(CodecError):
    code = "ERR_INVALID_AMOUNT"


class InvalidPayloadSizeError(CodecError):
    code = "ERR_PAYLOAD_SIZE"
