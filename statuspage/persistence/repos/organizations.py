from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import Organization, OrganizationMember


async def get_organization(session: AsyncSession, organization_id: int) -> Organization | None:
    result = await session.execute(select(Organization).where(Organization.id == organization_id))
    return result.scalar_one_or_none()


async def lock_organization(session: AsyncSession, organization_id: int) -> Organization | None:
    # Row lock serializes concurrent quota checks under the same organization (no-op on SQLite).
    result = await session.execute(
        select(Organization).where(Organization.id == organization_id).with_for_update()
    )
    return result.scalar_one_or_none()


async def get_organization_by_slug(session: AsyncSession, slug: str) -> Organization | None:
    result = await session.execute(select(Organization).where(Organization.slug == slug))
    return result.scalar_one_or_none()


async def list_organizations_for_user(session: AsyncSession, user_id: int) -> list[Organization]:
    # Owned or member-of; DISTINCT collapses users who are both.
    member_org_ids = select(OrganizationMember.organization_id).where(
        OrganizationMember.user_id == user_id
    )
    result = await session.execute(
        select(Organization)
        .where(or_(Organization.owner_id == user_id, Organization.id.in_(member_org_ids)))
        .order_by(Organization.created_at, Organization.id)
    )
    return list(result.scalars().unique().all())


async def create_organization(
    session: AsyncSession,
    *,
    name: str,
    slug: str,
    plan_type: str,
    owner_id: int,
) -> Organization:
    organization = Organization(name=name, slug=slug, plan_type=plan_type, owner_id=owner_id)
    session.add(organization)
    await session.flush()
    return organization


async def get_membership(
    session: AsyncSession, organization_id: int, user_id: int
) -> OrganizationMember | None:
    result = await session.execute(
        select(OrganizationMember).where(
            OrganizationMember.organization_id == organization_id,
            OrganizationMember.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def count_members(session: AsyncSession, organization_id: int) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(OrganizationMember)
        .where(OrganizationMember.organization_id == organization_id)
    )
    return int(result.scalar() or 0)


async def create_membership(
    session: AsyncSession,
    *,
    organization_id: int,
    user_id: int,
    role: str,
) -> OrganizationMember:
    member = OrganizationMember(organization_id=organization_id, user_id=user_id, role=role)
    session.add(member)
    await session.flush()
    return member
