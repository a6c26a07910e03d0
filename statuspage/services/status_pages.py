from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.config import get_settings
from statuspage.core.errors import NotFoundError
from statuspage.domain.models import StatusPage
from statuspage.domain.schemas import CreateStatusPageInput, UpdateStatusPageInput
from statuspage.domain.state import ResourceKind
from statuspage.persistence.db import transaction
from statuspage.persistence.repos import organizations as organizations_repo
from statuspage.persistence.repos import status_pages as status_pages_repo
from statuspage.persistence.repos.common import apply_patch
from statuspage.services.quota import enforce_quota


logger = logging.getLogger(__name__)


async def create_status_page(session: AsyncSession, payload: CreateStatusPageInput) -> StatusPage:
    lock_parent = get_settings().quota_lock_parent_rows
    async with transaction(session):
        if lock_parent:
            organization = await organizations_repo.lock_organization(session, payload.organization_id)
        else:
            organization = await organizations_repo.get_organization(session, payload.organization_id)
        if organization is None:
            raise NotFoundError("Organization", payload.organization_id)
        current = await status_pages_repo.count_status_pages(session, organization.id)
        enforce_quota(organization.plan_type, ResourceKind.STATUS_PAGES, current)
        page = await status_pages_repo.create_status_page(
            session,
            organization_id=organization.id,
            name=payload.name,
            slug=payload.slug,
            description=payload.description,
            custom_domain=payload.custom_domain,
            branding_logo_url=payload.branding_logo_url,
            branding_primary_color=payload.branding_primary_color,
            branding_secondary_color=payload.branding_secondary_color,
            is_public=payload.is_public,
        )
    logger.info(
        "status_page_created status_page_id=%s organization_id=%s", page.id, page.organization_id
    )
    return page


async def get_status_pages(session: AsyncSession, organization_id: int) -> list[StatusPage]:
    # Unknown organizations are an error here, unlike the other list reads.
    if await organizations_repo.get_organization(session, organization_id) is None:
        raise NotFoundError("Organization", organization_id)
    return await status_pages_repo.list_status_pages(session, organization_id)


async def get_status_page(session: AsyncSession, status_page_id: int) -> StatusPage | None:
    return await status_pages_repo.get_status_page(session, status_page_id)


async def update_status_page(
    session: AsyncSession, status_page_id: int, payload: UpdateStatusPageInput
) -> StatusPage:
    patch = payload.to_patch()
    async with transaction(session):
        page = await status_pages_repo.get_status_page(session, status_page_id)
        if page is None:
            raise NotFoundError("Status page", status_page_id)
        apply_patch(page, patch)
    logger.info("status_page_updated status_page_id=%s fields=%s", status_page_id, sorted(patch))
    return page
