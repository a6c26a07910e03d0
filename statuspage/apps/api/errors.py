from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from statuspage.apps.api.response import error_json
from statuspage.core.errors import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    QuotaExceededError,
    ReferentialViolationError,
    StatusPageError,
)


logger = logging.getLogger(__name__)

_DEFAULT_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    402: "QUOTA_EXCEEDED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}

# Most specific class first; the first isinstance match wins.
_DOMAIN_STATUS: tuple[tuple[type[StatusPageError], int], ...] = (
    (NotFoundError, 404),
    (QuotaExceededError, 402),
    (ConflictError, 409),
    (ReferentialViolationError, 422),
    (DatabaseError, 500),
)


def _default_code(status_code: int) -> str:
    return _DEFAULT_ERROR_CODES.get(status_code, "UNKNOWN_ERROR")


def status_for_error(exc: StatusPageError) -> int:
    for error_type, status_code in _DOMAIN_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _split_detail(detail: Any, status_code: int) -> tuple[str, str, dict[str, Any] | None]:
    # Extract code/message/details from HTTPException detail payloads.
    if isinstance(detail, dict):
        code = str(detail.get("code") or _default_code(status_code))
        message = str(detail.get("message") or "Request failed")
        details = {k: v for k, v in detail.items() if k not in {"code", "message"}}
        return code, message, details or None
    if isinstance(detail, str):
        return _default_code(status_code), detail, None
    return _default_code(status_code), "Request failed", None


async def domain_exception_handler(request: Request, exc: StatusPageError) -> JSONResponse:
    # Messages are surfaced verbatim; they never carry credential material.
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error("domain_error code=%s message=%s", exc.code, exc.message)
    return error_json(
        request=request,
        status_code=status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("database_error path=%s", request.url.path)
    return error_json(
        request=request,
        status_code=500,
        code=DatabaseError.code,
        message="Database error while processing request",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code, message, details = _split_detail(exc.detail, exc.status_code)
    return error_json(
        request=request,
        status_code=exc.status_code,
        code=code,
        message=message,
        details=details,
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Structured details let clients point at the offending field.
    return error_json(
        request=request,
        status_code=422,
        code="REQUEST_VALIDATION_ERROR",
        message="Validation error",
        details={"errors": exc.errors()},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Avoid leaking stack traces; return a stable internal error envelope.
    logger.exception("unhandled_error path=%s", request.url.path)
    return error_json(
        request=request,
        status_code=500,
        code="INTERNAL_ERROR",
        message="Internal server error",
    )
