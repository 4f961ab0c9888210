"""FastAPI application for promptqr."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from .config import settings
from .emvco_encoder import MAX_PAYLOAD_LENGTH
from .errors import CodecError
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_service_error
from .schemas import (
    GenerateQRRequest,
    GenerateQRResponse,
    PayloadRequest,
    ScanResponse,
    TLVEntry,
    ValidateResponse,
)
from .services.errors import ServiceError, err_payload_too_large
from .services.generator import PaymentQRGenerator
from .services.scan import ScanService
from .tlv import scan_tlv
from .validation import has_valid_crc, is_valid_emvco_payload

app = FastAPI(title="promptqr", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("promptqr.api")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("starting", extra={"app_name": settings.app_name, "environment": settings.environment})


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


def _error_response(request: Request, code: str, message: str, status_code: int) -> JSONResponse:
    route_path = _route_path(request)
    logger.warning("service error", extra={"code": code, "path": route_path, "method": request.method})
    record_service_error(code, route_path)
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _error_response(request, exc.code, exc.message, exc.status_code)


@app.exception_handler(CodecError)
async def codec_error_handler(request: Request, exc: CodecError) -> JSONResponse:
    return _error_response(request, exc.code, str(exc), 422)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception",
        extra={"path": _route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/promptpay/scan", response_model=ScanResponse, tags=["promptpay"])
async def scan_promptpay(payload: PayloadRequest) -> ScanResponse:
    result = ScanService().handle_scan(payload.payload)
    return ScanResponse(
        promptpay_id=result.promptpay.id,
        kind=result.promptpay.kind,
        qr_compatible=result.promptpay.qr_compatible,
        display_id=result.display_id,
        qr_url=result.qr_url,
    )


@app.post("/v1/promptpay/qr", response_model=GenerateQRResponse, tags=["promptpay"])
async def generate_qr(payload: GenerateQRRequest) -> GenerateQRResponse:
    result = PaymentQRGenerator().create_payment_qr(merchant_payload=payload.payload, amount=payload.amount)
    return GenerateQRResponse(
        promptpay_id=result.promptpay.id,
        kind=result.promptpay.kind,
        qr_compatible=result.promptpay.qr_compatible,
        payload=result.payload,
        crc=result.crc,
        qr_url=result.qr_url,
        bank_transfer_fallback=result.bank_transfer_fallback,
    )


@app.post("/v1/promptpay/validate", response_model=ValidateResponse, tags=["promptpay"])
async def validate_payload(payload: PayloadRequest) -> ValidateResponse:
    if len(payload.payload) > MAX_PAYLOAD_LENGTH:
        raise err_payload_too_large()
    scan = scan_tlv(payload.payload)
    return ValidateResponse(
        structurally_valid=is_valid_emvco_payload(payload.payload),
        crc_valid=has_valid_crc(payload.payload),
        truncated=scan.truncated,
        entries=[TLVEntry(tag=item.tag, value=item.value) for item in scan.items],
    )
