from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import StatusPage


async def get_status_page(session: AsyncSession, status_page_id: int) -> StatusPage | None:
    result = await session.execute(select(StatusPage).where(StatusPage.id == status_page_id))
    return result.scalar_one_or_none()


async def lock_status_page(session: AsyncSession, status_page_id: int) -> StatusPage | None:
    # Row lock serializes concurrent component quota checks on one page (no-op on SQLite).
    result = await session.execute(
        select(StatusPage).where(StatusPage.id == status_page_id).with_for_update()
    )
    return result.scalar_one_or_none()


async def list_status_pages(session: AsyncSession, organization_id: int) -> list[StatusPage]:
    result = await session.execute(
        select(StatusPage)
        .where(StatusPage.organization_id == organization_id)
        .order_by(StatusPage.created_at, StatusPage.id)
    )
    return list(result.scalars().all())


async def count_status_pages(session: AsyncSession, organization_id: int) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(StatusPage)
        .where(StatusPage.organization_id == organization_id)
    )
    return int(result.scalar() or 0)


async def create_status_page(
    session: AsyncSession,
    *,
    organization_id: int,
    name: str,
    slug: str,
    description: str | None,
    custom_domain: str | None,
    branding_logo_url: str | None,
    branding_primary_color: str | None,
    branding_secondary_color: str | None,
    is_public: bool,
) -> StatusPage:
    page = StatusPage(
        organization_id=organization_id,
        name=name,
        slug=slug,
        description=description,
        custom_domain=custom_domain,
        branding_logo_url=branding_logo_url,
        branding_primary_color=branding_primary_color,
        branding_secondary_color=branding_secondary_color,
        is_public=is_public,
    )
    session.add(page)
    await session.flush()
    return page
