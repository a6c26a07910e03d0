from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, row_response, success_response
from statuspage.domain.schemas import (
    ComponentResponse,
    CreateComponentInput,
    DeleteResponse,
    UpdateComponentInput,
)
from statuspage.services import cascade
from statuspage.services import components as components_service


router = APIRouter(prefix="/components", tags=["components"], responses=DEFAULT_ERROR_RESPONSES)


@router.post("", status_code=201, response_model=SuccessEnvelope[ComponentResponse])
async def create_component(
    request: Request,
    payload: CreateComponentInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    component = await components_service.create_component(db, payload)
    return row_response(request=request, schema=ComponentResponse, row=component)


@router.patch("/{component_id}", response_model=SuccessEnvelope[ComponentResponse])
async def update_component(
    component_id: int,
    request: Request,
    payload: UpdateComponentInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    component = await components_service.update_component(db, component_id, payload)
    return row_response(request=request, schema=ComponentResponse, row=component)


@router.delete("/{component_id}", response_model=SuccessEnvelope[DeleteResponse])
async def delete_component(
    component_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    deleted = await cascade.delete_component(db, component_id)
    return success_response(request=request, data=DeleteResponse(deleted=deleted))
