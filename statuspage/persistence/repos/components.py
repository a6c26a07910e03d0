from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import Component


async def get_component(session: AsyncSession, component_id: int) -> Component | None:
    result = await session.execute(select(Component).where(Component.id == component_id))
    return result.scalar_one_or_none()


async def list_components(session: AsyncSession, status_page_id: int) -> list[Component]:
    # Display order; id breaks ties between equal positions.
    result = await session.execute(
        select(Component)
        .where(Component.status_page_id == status_page_id)
        .order_by(Component.position, Component.id)
    )
    return list(result.scalars().all())


async def list_component_ids_on_page(
    session: AsyncSession, status_page_id: int, component_ids: Iterable[int]
) -> set[int]:
    ids = list(component_ids)
    if not ids:
        return set()
    result = await session.execute(
        select(Component.id).where(
            Component.status_page_id == status_page_id,
            Component.id.in_(ids),
        )
    )
    return set(result.scalars().all())


async def count_components(session: AsyncSession, status_page_id: int) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Component)
        .where(Component.status_page_id == status_page_id)
    )
    return int(result.scalar() or 0)


async def create_component(
    session: AsyncSession,
    *,
    status_page_id: int,
    name: str,
    description: str | None,
    status: str,
    position: int,
) -> Component:
    component = Component(
        status_page_id=status_page_id,
        name=name,
        description=description,
        status=status,
        position=position,
    )
    session.add(component)
    await session.flush()
    return component
