from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.config import get_settings
from statuspage.core.errors import ConflictError, NotFoundError, ReferentialViolationError
from statuspage.domain.models import Organization, OrganizationMember
from statuspage.domain.schemas import AddOrganizationMemberInput, CreateOrganizationInput
from statuspage.domain.state import ResourceKind
from statuspage.persistence.db import transaction
from statuspage.persistence.guards import translate_integrity_error
from statuspage.persistence.repos import organizations as organizations_repo
from statuspage.persistence.repos import users as users_repo
from statuspage.services.quota import enforce_quota


logger = logging.getLogger(__name__)


async def create_organization(
    session: AsyncSession, payload: CreateOrganizationInput
) -> Organization:
    conflict_message = f"Organization with slug '{payload.slug}' already exists"
    async with transaction(session):
        if await users_repo.get_user(session, payload.owner_id) is None:
            raise ReferentialViolationError(
                f"Owner with id {payload.owner_id} not found",
                details={"owner_id": payload.owner_id},
            )
        if await organizations_repo.get_organization_by_slug(session, payload.slug) is not None:
            raise ConflictError(conflict_message, details={"slug": payload.slug})
        try:
            organization = await organizations_repo.create_organization(
                session,
                name=payload.name,
                slug=payload.slug,
                plan_type=payload.plan_type,
                owner_id=payload.owner_id,
            )
        except IntegrityError as exc:
            # A concurrent insert can still win the slug between check and insert.
            raise translate_integrity_error(exc, conflict_message=conflict_message) from exc
    logger.info(
        "organization_created organization_id=%s plan=%s", organization.id, organization.plan_type
    )
    return organization


async def get_organizations(session: AsyncSession, user_id: int) -> list[Organization]:
    return await organizations_repo.list_organizations_for_user(session, user_id)


async def add_organization_member(
    session: AsyncSession, organization_id: int, payload: AddOrganizationMemberInput
) -> OrganizationMember:
    conflict_message = "User is already a member of this organization"
    lock_parent = get_settings().quota_lock_parent_rows
    async with transaction(session):
        if lock_parent:
            organization = await organizations_repo.lock_organization(session, organization_id)
        else:
            organization = await organizations_repo.get_organization(session, organization_id)
        if organization is None:
            raise NotFoundError("Organization", organization_id)
        if await users_repo.get_user(session, payload.user_id) is None:
            raise ReferentialViolationError(
                f"User with id {payload.user_id} not found",
                details={"user_id": payload.user_id},
            )
        if await organizations_repo.get_membership(session, organization_id, payload.user_id):
            raise ConflictError(
                conflict_message,
                details={"organization_id": organization_id, "user_id": payload.user_id},
            )
        current = await organizations_repo.count_members(session, organization_id)
        enforce_quota(organization.plan_type, ResourceKind.MEMBERS, current)
        try:
            member = await organizations_repo.create_membership(
                session,
                organization_id=organization_id,
                user_id=payload.user_id,
                role=payload.role,
            )
        except IntegrityError as exc:
            raise translate_integrity_error(exc, conflict_message=conflict_message) from exc
    logger.info(
        "organization_member_added organization_id=%s user_id=%s", organization_id, payload.user_id
    )
    return member
