from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.config import get_settings
from statuspage.core.errors import NotFoundError
from statuspage.domain.models import Component
from statuspage.domain.schemas import CreateComponentInput, UpdateComponentInput
from statuspage.domain.state import ResourceKind
from statuspage.persistence.db import transaction
from statuspage.persistence.repos import components as components_repo
from statuspage.persistence.repos import organizations as organizations_repo
from statuspage.persistence.repos import status_pages as status_pages_repo
from statuspage.persistence.repos.common import apply_patch
from statuspage.services.quota import enforce_quota


logger = logging.getLogger(__name__)


async def create_component(session: AsyncSession, payload: CreateComponentInput) -> Component:
    """Create a component, counted per status page against the owning org's plan."""
    lock_parent = get_settings().quota_lock_parent_rows
    async with transaction(session):
        if lock_parent:
            page = await status_pages_repo.lock_status_page(session, payload.status_page_id)
        else:
            page = await status_pages_repo.get_status_page(session, payload.status_page_id)
        if page is None:
            raise NotFoundError("Status page", payload.status_page_id)
        organization = await organizations_repo.get_organization(session, page.organization_id)
        current = await components_repo.count_components(session, page.id)
        enforce_quota(organization.plan_type, ResourceKind.COMPONENTS, current)
        component = await components_repo.create_component(
            session,
            status_page_id=page.id,
            name=payload.name,
            description=payload.description,
            status=payload.status,
            position=payload.position,
        )
    logger.info(
        "component_created component_id=%s status_page_id=%s", component.id, component.status_page_id
    )
    return component


async def get_components(session: AsyncSession, status_page_id: int) -> list[Component]:
    return await components_repo.list_components(session, status_page_id)


async def update_component(
    session: AsyncSession, component_id: int, payload: UpdateComponentInput
) -> Component:
    patch = payload.to_patch()
    async with transaction(session):
        component = await components_repo.get_component(session, component_id)
        if component is None:
            raise NotFoundError("Component", component_id)
        apply_patch(component, patch)
    logger.info("component_updated component_id=%s fields=%s", component_id, sorted(patch))
    return component
