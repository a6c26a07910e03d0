from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import MaintenanceWindow


async def get_maintenance_window(
    session: AsyncSession, maintenance_window_id: int
) -> MaintenanceWindow | None:
    result = await session.execute(
        select(MaintenanceWindow).where(MaintenanceWindow.id == maintenance_window_id)
    )
    return result.scalar_one_or_none()


async def list_maintenance_windows(
    session: AsyncSession, status_page_id: int
) -> list[MaintenanceWindow]:
    result = await session.execute(
        select(MaintenanceWindow)
        .where(MaintenanceWindow.status_page_id == status_page_id)
        .order_by(MaintenanceWindow.scheduled_start.desc(), MaintenanceWindow.id.desc())
    )
    return list(result.scalars().all())


async def create_maintenance_window(
    session: AsyncSession,
    *,
    status_page_id: int,
    title: str,
    description: str,
    status: str,
    scheduled_start: datetime,
    scheduled_end: datetime,
    created_by: int,
) -> MaintenanceWindow:
    window = MaintenanceWindow(
        status_page_id=status_page_id,
        title=title,
        description=description,
        status=status,
        scheduled_start=scheduled_start,
        scheduled_end=scheduled_end,
        created_by=created_by,
    )
    session.add(window)
    await session.flush()
    return window
