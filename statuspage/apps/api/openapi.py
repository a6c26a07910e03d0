from __future__ import annotations

from typing import Any

from statuspage.apps.api.response import ErrorEnvelope


def _error_example(*, code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    # Build a consistent error envelope example for OpenAPI docs.
    payload: dict[str, Any] = {
        "error": {"code": code, "message": message},
        "meta": {"request_id": "req_example", "api_version": "v1"},
    }
    if details:
        payload["error"]["details"] = details
    return payload


DEFAULT_ERROR_RESPONSES: dict[int, dict[str, Any]] = {
    402: {
        "model": ErrorEnvelope,
        "description": "Plan quota exceeded",
        "content": {
            "application/json": {
                "example": _error_example(
                    code="QUOTA_EXCEEDED",
                    message="Plan limit exceeded. free plan allows maximum 1 status pages",
                    details={"plan_tier": "free", "resource_kind": "status_pages", "limit": 1},
                ),
            }
        },
    },
    404: {
        "model": ErrorEnvelope,
        "description": "Not found",
        "content": {
            "application/json": {
                "example": _error_example(code="NOT_FOUND", message="Status page with id 42 not found"),
            }
        },
    },
    409: {
        "model": ErrorEnvelope,
        "description": "Conflict",
        "content": {
            "application/json": {
                "example": _error_example(
                    code="CONFLICT",
                    message="Organization with slug 'acme' already exists",
                ),
            }
        },
    },
    422: {
        "model": ErrorEnvelope,
        "description": "Validation or referential error",
        "content": {
            "application/json": {
                "example": _error_example(
                    code="REFERENTIAL_VIOLATION",
                    message="Components with ids 999, 1000 not found or do not belong to the status page",
                    details={"component_ids": [999, 1000]},
                ),
            }
        },
    },
    500: {
        "model": ErrorEnvelope,
        "description": "Internal server error",
        "content": {
            "application/json": {
                "example": _error_example(code="INTERNAL_ERROR", message="Internal server error"),
            }
        },
    },
}
