from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import (
    SuccessEnvelope,
    row_response,
    rows_response,
    success_response,
)
from statuspage.core.errors import NotFoundError
from statuspage.domain.schemas import (
    ComponentResponse,
    CreateStatusPageInput,
    DeleteResponse,
    IncidentResponse,
    MaintenanceWindowResponse,
    StatusPageResponse,
    UpdateStatusPageInput,
)
from statuspage.services import cascade
from statuspage.services import components as components_service
from statuspage.services import incidents as incidents_service
from statuspage.services import maintenance as maintenance_service
from statuspage.services import status_pages as status_pages_service


router = APIRouter(prefix="/status-pages", tags=["status-pages"], responses=DEFAULT_ERROR_RESPONSES)


@router.post("", status_code=201, response_model=SuccessEnvelope[StatusPageResponse])
async def create_status_page(
    request: Request,
    payload: CreateStatusPageInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    page = await status_pages_service.create_status_page(db, payload)
    return row_response(request=request, schema=StatusPageResponse, row=page)


@router.get("/{status_page_id}", response_model=SuccessEnvelope[StatusPageResponse])
async def get_status_page(
    status_page_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    page = await status_pages_service.get_status_page(db, status_page_id)
    if page is None:
        raise NotFoundError("Status page", status_page_id)
    return row_response(request=request, schema=StatusPageResponse, row=page)


@router.patch("/{status_page_id}", response_model=SuccessEnvelope[StatusPageResponse])
async def update_status_page(
    status_page_id: int,
    request: Request,
    payload: UpdateStatusPageInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    page = await status_pages_service.update_status_page(db, status_page_id, payload)
    return row_response(request=request, schema=StatusPageResponse, row=page)


@router.delete("/{status_page_id}", response_model=SuccessEnvelope[DeleteResponse])
async def delete_status_page(
    status_page_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    # A missing page reports deleted=false rather than 404.
    deleted = await cascade.delete_status_page(db, status_page_id)
    return success_response(request=request, data=DeleteResponse(deleted=deleted))


@router.get(
    "/{status_page_id}/components",
    response_model=SuccessEnvelope[list[ComponentResponse]],
)
async def list_components(
    status_page_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    components = await components_service.get_components(db, status_page_id)
    return rows_response(request=request, schema=ComponentResponse, rows=components)


@router.get(
    "/{status_page_id}/incidents",
    response_model=SuccessEnvelope[list[IncidentResponse]],
)
async def list_incidents(
    status_page_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    incidents = await incidents_service.get_incidents(db, status_page_id)
    return rows_response(request=request, schema=IncidentResponse, rows=incidents)


@router.get(
    "/{status_page_id}/maintenance-windows",
    response_model=SuccessEnvelope[list[MaintenanceWindowResponse]],
)
async def list_maintenance_windows(
    status_page_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    windows = await maintenance_service.get_maintenance_windows(db, status_page_id)
    return rows_response(request=request, schema=MaintenanceWindowResponse, rows=windows)
