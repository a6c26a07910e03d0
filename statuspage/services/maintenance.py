from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.errors import NotFoundError, ReferentialViolationError
from statuspage.domain.models import MaintenanceWindow, utc_now
from statuspage.domain.schemas import CreateMaintenanceWindowInput, UpdateMaintenanceWindowInput
from statuspage.domain.state import MaintenanceStatus
from statuspage.persistence.db import transaction
from statuspage.persistence.repos import maintenance as maintenance_repo
from statuspage.persistence.repos import status_pages as status_pages_repo
from statuspage.persistence.repos import users as users_repo
from statuspage.persistence.repos.common import apply_patch
from statuspage.services.affected_components import (
    link_maintenance_components,
    validate_maintenance_components,
)
from statuspage.services.lifecycle import maintenance_transition


logger = logging.getLogger(__name__)


async def create_maintenance_window(
    session: AsyncSession, payload: CreateMaintenanceWindowInput
) -> MaintenanceWindow:
    """Create a scheduled maintenance window.

    Every reference is checked before the first insert, so a bad component id
    leaves neither the window nor any junction row behind.
    """
    async with transaction(session):
        if await status_pages_repo.get_status_page(session, payload.status_page_id) is None:
            raise NotFoundError("Status page", payload.status_page_id)
        if await users_repo.get_user(session, payload.created_by) is None:
            raise ReferentialViolationError(
                f"User with id {payload.created_by} not found",
                details={"created_by": payload.created_by},
            )
        component_ids = await validate_maintenance_components(
            session, payload.status_page_id, payload.affected_component_ids
        )
        window = await maintenance_repo.create_maintenance_window(
            session,
            status_page_id=payload.status_page_id,
            title=payload.title,
            description=payload.description,
            status=MaintenanceStatus.SCHEDULED.value,
            scheduled_start=payload.scheduled_start,
            scheduled_end=payload.scheduled_end,
            created_by=payload.created_by,
        )
        await link_maintenance_components(session, window.id, component_ids)
    logger.info(
        "maintenance_window_created maintenance_window_id=%s status_page_id=%s components=%s",
        window.id,
        window.status_page_id,
        len(component_ids),
    )
    return window


async def get_maintenance_windows(
    session: AsyncSession, status_page_id: int
) -> list[MaintenanceWindow]:
    return await maintenance_repo.list_maintenance_windows(session, status_page_id)


async def update_maintenance_window(
    session: AsyncSession, maintenance_window_id: int, payload: UpdateMaintenanceWindowInput
) -> MaintenanceWindow:
    patch = payload.to_patch()
    now = utc_now()
    async with transaction(session):
        window = await maintenance_repo.get_maintenance_window(session, maintenance_window_id)
        if window is None:
            raise NotFoundError("Maintenance window", maintenance_window_id)
        if "status" in patch:
            # Derived values are applied last; a return to scheduled wipes explicit actuals too.
            derived = maintenance_transition(window.status, patch["status"], overrides=patch, now=now)
            patch.update(derived.as_dict())
        apply_patch(window, patch, now=now)
    logger.info(
        "maintenance_window_updated maintenance_window_id=%s fields=%s",
        maintenance_window_id,
        sorted(patch),
    )
    return window
