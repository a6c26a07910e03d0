from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import IncidentAffectedComponent, MaintenanceAffectedComponent


async def add_incident_links(
    session: AsyncSession, incident_id: int, component_ids: Sequence[int]
) -> list[IncidentAffectedComponent]:
    links = [
        IncidentAffectedComponent(incident_id=incident_id, component_id=component_id)
        for component_id in component_ids
    ]
    session.add_all(links)
    await session.flush()
    return links


async def add_maintenance_links(
    session: AsyncSession, maintenance_window_id: int, component_ids: Sequence[int]
) -> list[MaintenanceAffectedComponent]:
    links = [
        MaintenanceAffectedComponent(
            maintenance_window_id=maintenance_window_id, component_id=component_id
        )
        for component_id in component_ids
    ]
    session.add_all(links)
    await session.flush()
    return links


async def list_incident_component_ids(session: AsyncSession, incident_id: int) -> list[int]:
    result = await session.execute(
        select(IncidentAffectedComponent.component_id)
        .where(IncidentAffectedComponent.incident_id == incident_id)
        .order_by(IncidentAffectedComponent.id)
    )
    return list(result.scalars().all())


async def list_maintenance_component_ids(
    session: AsyncSession, maintenance_window_id: int
) -> list[int]:
    result = await session.execute(
        select(MaintenanceAffectedComponent.component_id)
        .where(MaintenanceAffectedComponent.maintenance_window_id == maintenance_window_id)
        .order_by(MaintenanceAffectedComponent.id)
    )
    return list(result.scalars().all())
