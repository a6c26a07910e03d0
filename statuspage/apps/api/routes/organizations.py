from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, row_response, rows_response
from statuspage.domain.schemas import (
    AddOrganizationMemberInput,
    CreateOrganizationInput,
    OrganizationMemberResponse,
    OrganizationResponse,
    StatusPageResponse,
)
from statuspage.services import organizations as organizations_service
from statuspage.services import status_pages as status_pages_service


router = APIRouter(
    prefix="/organizations", tags=["organizations"], responses=DEFAULT_ERROR_RESPONSES
)


@router.post("", status_code=201, response_model=SuccessEnvelope[OrganizationResponse])
async def create_organization(
    request: Request,
    payload: CreateOrganizationInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    organization = await organizations_service.create_organization(db, payload)
    return row_response(request=request, schema=OrganizationResponse, row=organization)


@router.post(
    "/{organization_id}/members",
    status_code=201,
    response_model=SuccessEnvelope[OrganizationMemberResponse],
)
async def add_member(
    organization_id: int,
    request: Request,
    payload: AddOrganizationMemberInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    member = await organizations_service.add_organization_member(db, organization_id, payload)
    return row_response(request=request, schema=OrganizationMemberResponse, row=member)


@router.get(
    "/{organization_id}/status-pages",
    response_model=SuccessEnvelope[list[StatusPageResponse]],
)
async def list_status_pages(
    organization_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    pages = await status_pages_service.get_status_pages(db, organization_id)
    return rows_response(request=request, schema=StatusPageResponse, rows=pages)
