from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import func, select

from statuspage.domain.models import (
    Component,
    Incident,
    MaintenanceWindow,
    Organization,
    StatusPage,
    User,
)
from statuspage.persistence.db import SessionLocal


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


async def create_test_user(*, email: str | None = None, role: str = "member") -> User:
    # Seed users straight through the ORM; credential hashing is covered separately.
    async with SessionLocal() as session:
        user = User(
            email=email or f"user-{uuid4().hex[:10]}@example.com",
            password_hash="$2b$04$placeholderplaceholderuYgQ1w3bq9yF9kqfS4v1xJ6m8W3uGmC2",
            first_name="Test",
            last_name="User",
            role=role,
        )
        session.add(user)
        await session.commit()
        return user


async def create_test_organization(
    *, owner_id: int | None = None, plan_type: str = "free", slug: str | None = None
) -> Organization:
    if owner_id is None:
        owner_id = (await create_test_user(role="admin")).id
    async with SessionLocal() as session:
        organization = Organization(
            name="Acme",
            slug=slug or f"acme-{uuid4().hex[:10]}",
            plan_type=plan_type,
            owner_id=owner_id,
        )
        session.add(organization)
        await session.commit()
        return organization


async def create_test_status_page(
    *, organization_id: int | None = None, plan_type: str = "enterprise", name: str = "Status"
) -> StatusPage:
    if organization_id is None:
        organization_id = (await create_test_organization(plan_type=plan_type)).id
    async with SessionLocal() as session:
        page = StatusPage(
            organization_id=organization_id,
            name=name,
            slug=f"page-{uuid4().hex[:10]}",
        )
        session.add(page)
        await session.commit()
        return page


async def create_test_component(
    *, status_page_id: int, name: str = "API", position: int = 0
) -> Component:
    async with SessionLocal() as session:
        component = Component(status_page_id=status_page_id, name=name, position=position)
        session.add(component)
        await session.commit()
        return component


async def create_test_incident(
    *, status_page_id: int, created_by: int, status: str = "investigating"
) -> Incident:
    async with SessionLocal() as session:
        incident = Incident(
            status_page_id=status_page_id,
            title="Elevated error rates",
            description="Investigating elevated 5xx responses",
            status=status,
            created_by=created_by,
        )
        session.add(incident)
        await session.commit()
        return incident


async def create_test_maintenance_window(
    *, status_page_id: int, created_by: int, start: datetime | None = None
) -> MaintenanceWindow:
    start = start or utc(2030, 1, 1, 2)
    async with SessionLocal() as session:
        window = MaintenanceWindow(
            status_page_id=status_page_id,
            title="Database upgrade",
            description="Primary failover",
            scheduled_start=start,
            scheduled_end=start + timedelta(hours=2),
            created_by=created_by,
        )
        session.add(window)
        await session.commit()
        return window


async def call_service(fn, *args, **kwargs):
    # Services own their transaction, so each call gets a fresh session.
    async with SessionLocal() as session:
        return await fn(session, *args, **kwargs)


async def count_rows(model, *criteria) -> int:
    async with SessionLocal() as session:
        result = await session.execute(select(func.count()).select_from(model).where(*criteria))
        return int(result.scalar_one())
