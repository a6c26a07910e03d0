from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from statuspage.apps.api.errors import (
    database_exception_handler,
    domain_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from statuspage.apps.api.response import API_VERSION
from statuspage.apps.api.routes.components import router as components_router
from statuspage.apps.api.routes.health import router as health_router
from statuspage.apps.api.routes.incidents import router as incidents_router
from statuspage.apps.api.routes.maintenance import router as maintenance_router
from statuspage.apps.api.routes.organizations import router as organizations_router
from statuspage.apps.api.routes.status_pages import router as status_pages_router
from statuspage.apps.api.routes.users import router as users_router
from statuspage.core.config import get_settings
from statuspage.core.errors import StatusPageError
from statuspage.core.logging import configure_logging


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()
    app = FastAPI(title="Status Page API", version=API_VERSION, docs_url=None, redoc_url=None)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):  # type: ignore[override]
        # Preserve incoming request IDs or assign a new one for traceability.
        request_id = request.headers.get("X-Request-Id") or str(uuid4())
        request.state.request_id = request_id
        start = time.monotonic()
        response = await call_next(request)
        latency_ms = (time.monotonic() - start) * 1000.0
        logger.debug(
            "request method=%s path=%s status=%s latency_ms=%.1f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            latency_ms,
            request_id,
        )
        response.headers.setdefault("X-Request-Id", request_id)
        return response

    @app.exception_handler(StatusPageError)
    async def _domain_exception_handler(request: Request, exc: StatusPageError):
        return await domain_exception_handler(request, exc)

    @app.exception_handler(SQLAlchemyError)
    async def _database_exception_handler(request: Request, exc: SQLAlchemyError):
        return await database_exception_handler(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        return await validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        return await unhandled_exception_handler(request, exc)

    app.include_router(health_router, prefix=f"/{API_VERSION}")
    app.include_router(users_router, prefix=f"/{API_VERSION}")
    app.include_router(organizations_router, prefix=f"/{API_VERSION}")
    app.include_router(status_pages_router, prefix=f"/{API_VERSION}")
    app.include_router(components_router, prefix=f"/{API_VERSION}")
    app.include_router(incidents_router, prefix=f"/{API_VERSION}")
    app.include_router(maintenance_router, prefix=f"/{API_VERSION}")

    @app.get("/v1/openapi.json", include_in_schema=False)
    async def openapi_json() -> JSONResponse:
        return JSONResponse(app.openapi())

    @app.get("/v1/docs", include_in_schema=False)
    async def v1_docs() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url="/v1/openapi.json", title="Status Page API v1")

    @app.get("/docs", include_in_schema=False)
    async def docs_redirect() -> RedirectResponse:
        return RedirectResponse(url="/v1/docs")

    logger.info("app_created name=%s api_version=%s", settings.app_name, API_VERSION)
    return app


app = create_app()
