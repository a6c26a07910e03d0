from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, row_response, rows_response
from statuspage.domain.schemas import (
    CreateIncidentInput,
    CreateIncidentUpdateInput,
    IncidentResponse,
    IncidentUpdateResponse,
    UpdateIncidentInput,
)
from statuspage.domain.state import IncidentStatus
from statuspage.services import incidents as incidents_service


router = APIRouter(prefix="/incidents", tags=["incidents"], responses=DEFAULT_ERROR_RESPONSES)


class IncidentUpdateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str
    status: IncidentStatus
    created_by: int

    # The incident id comes from the path only.
    model_config = {"extra": "forbid"}


@router.post("", status_code=201, response_model=SuccessEnvelope[IncidentResponse])
async def create_incident(
    request: Request,
    payload: CreateIncidentInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    incident = await incidents_service.create_incident(db, payload)
    return row_response(request=request, schema=IncidentResponse, row=incident)


@router.patch("/{incident_id}", response_model=SuccessEnvelope[IncidentResponse])
async def update_incident(
    incident_id: int,
    request: Request,
    payload: UpdateIncidentInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    incident = await incidents_service.update_incident(db, incident_id, payload)
    return row_response(request=request, schema=IncidentResponse, row=incident)


@router.post(
    "/{incident_id}/updates",
    status_code=201,
    response_model=SuccessEnvelope[IncidentUpdateResponse],
)
async def create_incident_update(
    incident_id: int,
    request: Request,
    payload: IncidentUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    update = await incidents_service.create_incident_update(
        db,
        CreateIncidentUpdateInput(incident_id=incident_id, **payload.model_dump()),
    )
    return row_response(request=request, schema=IncidentUpdateResponse, row=update)


@router.get(
    "/{incident_id}/updates",
    response_model=SuccessEnvelope[list[IncidentUpdateResponse]],
)
async def list_incident_updates(
    incident_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    updates = await incidents_service.get_incident_updates(db, incident_id)
    return rows_response(request=request, schema=IncidentUpdateResponse, rows=updates)
