from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, row_response
from statuspage.domain.schemas import (
    CreateMaintenanceWindowInput,
    MaintenanceWindowResponse,
    UpdateMaintenanceWindowInput,
)
from statuspage.services import maintenance as maintenance_service


router = APIRouter(
    prefix="/maintenance-windows", tags=["maintenance"], responses=DEFAULT_ERROR_RESPONSES
)


@router.post("", status_code=201, response_model=SuccessEnvelope[MaintenanceWindowResponse])
async def create_maintenance_window(
    request: Request,
    payload: CreateMaintenanceWindowInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    window = await maintenance_service.create_maintenance_window(db, payload)
    return row_response(request=request, schema=MaintenanceWindowResponse, row=window)


@router.patch("/{maintenance_window_id}", response_model=SuccessEnvelope[MaintenanceWindowResponse])
async def update_maintenance_window(
    maintenance_window_id: int,
    request: Request,
    payload: UpdateMaintenanceWindowInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    # Status changes stamp actual_start/actual_end unless the payload supplies them.
    window = await maintenance_service.update_maintenance_window(db, maintenance_window_id, payload)
    return row_response(request=request, schema=MaintenanceWindowResponse, row=window)
