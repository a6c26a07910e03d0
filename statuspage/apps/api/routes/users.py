from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.apps.api.deps import get_db
from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, row_response, rows_response
from statuspage.domain.schemas import CreateUserInput, OrganizationResponse, UserResponse
from statuspage.services import organizations as organizations_service
from statuspage.services import users as users_service


router = APIRouter(prefix="/users", tags=["users"], responses=DEFAULT_ERROR_RESPONSES)


@router.post("", status_code=201, response_model=SuccessEnvelope[UserResponse])
async def create_user(
    request: Request,
    payload: CreateUserInput,
    db: AsyncSession = Depends(get_db),
) -> dict:
    user = await users_service.create_user(db, payload)
    return row_response(request=request, schema=UserResponse, row=user)


@router.get(
    "/{user_id}/organizations",
    response_model=SuccessEnvelope[list[OrganizationResponse]],
)
async def list_user_organizations(
    user_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> dict:
    # Owned and member organizations, each listed once; unknown users get an empty list.
    organizations = await organizations_service.get_organizations(db, user_id)
    return rows_response(request=request, schema=OrganizationResponse, rows=organizations)
