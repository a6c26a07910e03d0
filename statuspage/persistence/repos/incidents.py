from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import Incident, IncidentUpdate


async def get_incident(session: AsyncSession, incident_id: int) -> Incident | None:
    result = await session.execute(select(Incident).where(Incident.id == incident_id))
    return result.scalar_one_or_none()


async def lock_incident(session: AsyncSession, incident_id: int) -> Incident | None:
    # Serialize concurrent updates posted against the same incident.
    result = await session.execute(
        select(Incident).where(Incident.id == incident_id).with_for_update()
    )
    return result.scalar_one_or_none()


async def list_incidents(session: AsyncSession, status_page_id: int) -> list[Incident]:
    # Newest first; id breaks ties for rows created in the same instant.
    result = await session.execute(
        select(Incident)
        .where(Incident.status_page_id == status_page_id)
        .order_by(Incident.created_at.desc(), Incident.id.desc())
    )
    return list(result.scalars().all())


async def create_incident(
    session: AsyncSession,
    *,
    status_page_id: int,
    title: str,
    description: str,
    status: str,
    created_by: int,
    resolved_at: datetime | None,
) -> Incident:
    incident = Incident(
        status_page_id=status_page_id,
        title=title,
        description=description,
        status=status,
        created_by=created_by,
        resolved_at=resolved_at,
    )
    session.add(incident)
    await session.flush()
    return incident


async def list_incident_updates(session: AsyncSession, incident_id: int) -> list[IncidentUpdate]:
    result = await session.execute(
        select(IncidentUpdate)
        .where(IncidentUpdate.incident_id == incident_id)
        .order_by(IncidentUpdate.created_at.desc(), IncidentUpdate.id.desc())
    )
    return list(result.scalars().all())


async def create_incident_update(
    session: AsyncSession,
    *,
    incident_id: int,
    title: str,
    description: str,
    status: str,
    created_by: int,
) -> IncidentUpdate:
    update = IncidentUpdate(
        incident_id=incident_id,
        title=title,
        description=description,
        status=status,
        created_by=created_by,
    )
    session.add(update)
    await session.flush()
    return update
