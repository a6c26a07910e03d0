from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

from starlette.requests import Request

from statuspage.apps.api.response import error_json, error_response, rows_response
from statuspage.domain.schemas import ComponentResponse


def _request(headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/v1/x", "headers": headers or []})


def test_rows_response_renders_rows_through_schema_and_reuses_header_id() -> None:
    request = _request([(b"x-request-id", b"req-7")])
    stamp = datetime(2030, 1, 1, tzinfo=timezone.utc)
    rows = [
        SimpleNamespace(
            id=position + 1,
            status_page_id=1,
            name=name,
            description=None,
            status="operational",
            position=position,
            created_at=stamp,
            updated_at=stamp,
        )
        for position, name in enumerate(["API", "Dashboard"])
    ]
    payload = rows_response(request=request, schema=ComponentResponse, rows=rows)
    assert [item.name for item in payload["data"]] == ["API", "Dashboard"]
    assert all(isinstance(item, ComponentResponse) for item in payload["data"])
    assert payload["meta"] == {"request_id": "req-7", "api_version": "v1"}


def test_error_response_encodes_details_and_omits_empty_ones() -> None:
    request = _request()
    stamp = datetime(2030, 1, 1, tzinfo=timezone.utc)
    payload = error_response(
        request=request, code="CONFLICT", message="taken", details={"at": stamp}
    )
    assert payload["error"] == {
        "code": "CONFLICT",
        "message": "taken",
        "details": {"at": "2030-01-01T00:00:00+00:00"},
    }
    # The generated id sticks to the request for later envelopes.
    assert payload["meta"]["request_id"] == request.state.request_id

    bare = error_response(request=request, code="NOT_FOUND", message="gone")
    assert "details" not in bare["error"]


def test_error_json_sets_status_and_headers() -> None:
    response = error_json(
        request=_request(),
        status_code=405,
        code="METHOD_NOT_ALLOWED",
        message="Method Not Allowed",
        headers={"Allow": "GET"},
    )
    assert response.status_code == 405
    assert response.headers["allow"] == "GET"
