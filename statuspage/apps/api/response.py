from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar
from uuid import uuid4

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


API_VERSION = "v1"

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class ResponseMeta(BaseModel):
    # Echoed on every /v1 response so clients can quote the id in support tickets.
    request_id: str
    api_version: str = Field(default=API_VERSION)


class ErrorDetail(BaseModel):
    # code is the stable machine value; message is the human-readable domain text.
    code: str
    message: str
    details: dict[str, Any] | None = None


class SuccessEnvelope(BaseModel, Generic[T]):
    data: T
    meta: ResponseMeta


class ErrorEnvelope(BaseModel):
    error: ErrorDetail
    meta: ResponseMeta


def get_request_id(request: Request) -> str:
    # Handlers may run before the middleware has stamped the request.
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    request_id = request.headers.get("X-Request-Id") or str(uuid4())
    request.state.request_id = request_id
    return request_id


def _meta(request: Request) -> dict[str, Any]:
    return ResponseMeta(request_id=get_request_id(request)).model_dump()


def success_response(*, request: Request, data: Any) -> dict[str, Any]:
    return {"data": data, "meta": _meta(request)}


def row_response(*, request: Request, schema: type[ModelT], row: Any) -> dict[str, Any]:
    """Envelope a single ORM row rendered through its response schema."""
    return success_response(request=request, data=schema.model_validate(row))


def rows_response(
    *, request: Request, schema: type[ModelT], rows: Iterable[Any]
) -> dict[str, Any]:
    """Envelope a list of ORM rows, preserving the repository's ordering."""
    return success_response(request=request, data=[schema.model_validate(row) for row in rows])


def error_response(
    *,
    request: Request,
    code: str,
    message: str,
    details: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    # Details can carry datetimes or enums from domain errors; encode them for JSON.
    error = ErrorDetail(
        code=code,
        message=message,
        details=jsonable_encoder(dict(details)) if details else None,
    )
    return {"error": error.model_dump(exclude_none=True), "meta": _meta(request)}


def error_json(
    *,
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = error_response(request=request, code=code, message=message, details=details)
    return JSONResponse(content=payload, status_code=status_code, headers=headers)
