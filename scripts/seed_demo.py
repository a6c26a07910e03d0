from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from datetime import timedelta

from statuspage.core.logging import configure_logging
from statuspage.domain.models import utc_now
from statuspage.domain.schemas import (
    CreateComponentInput,
    CreateIncidentInput,
    CreateIncidentUpdateInput,
    CreateMaintenanceWindowInput,
    CreateOrganizationInput,
    CreateStatusPageInput,
    CreateUserInput,
)
from statuspage.persistence.db import SessionLocal
from statuspage.persistence.repos import organizations as organizations_repo
from statuspage.services import components as components_service
from statuspage.services import incidents as incidents_service
from statuspage.services import maintenance as maintenance_service
from statuspage.services import organizations as organizations_service
from statuspage.services import status_pages as status_pages_service
from statuspage.services import users as users_service


DEMO_OWNER_EMAIL = "demo-owner@example.com"
DEMO_OWNER_PASSWORD = "demo-password"
DEMO_ORG_SLUG = "demo"


@dataclass(frozen=True)
class DemoComponent:
    name: str
    description: str


DEMO_COMPONENTS: tuple[DemoComponent, ...] = (
    DemoComponent(name="API", description="Public REST API"),
    DemoComponent(name="Dashboard", description="Customer web dashboard"),
    DemoComponent(name="Webhooks", description="Outbound event delivery"),
    DemoComponent(name="Database", description="Primary Postgres cluster"),
)


async def _call(fn, *args):
    # Services commit their own transaction; give each call a fresh session.
    async with SessionLocal() as session:
        return await fn(session, *args)


async def seed_demo() -> int:
    async with SessionLocal() as session:
        existing = await organizations_repo.get_organization_by_slug(session, DEMO_ORG_SLUG)
    if existing is not None:
        print("Demo organization already seeded; skipping.")
        return 0

    owner = await _call(
        users_service.create_user,
        CreateUserInput(
            email=DEMO_OWNER_EMAIL,
            password=DEMO_OWNER_PASSWORD,
            first_name="Demo",
            last_name="Owner",
            role="owner",
        ),
    )
    organization = await _call(
        organizations_service.create_organization,
        CreateOrganizationInput(name="Demo Co", slug=DEMO_ORG_SLUG, plan_type="pro", owner_id=owner.id),
    )
    page = await _call(
        status_pages_service.create_status_page,
        CreateStatusPageInput(
            organization_id=organization.id,
            name="Demo Co Status",
            slug="demo-status",
            description="Live status of Demo Co services",
            branding_primary_color="#1f6feb",
        ),
    )
    component_ids: list[int] = []
    for position, demo in enumerate(DEMO_COMPONENTS):
        component = await _call(
            components_service.create_component,
            CreateComponentInput(
                status_page_id=page.id,
                name=demo.name,
                description=demo.description,
                position=position,
            ),
        )
        component_ids.append(component.id)

    incident = await _call(
        incidents_service.create_incident,
        CreateIncidentInput(
            status_page_id=page.id,
            title="Delayed webhook delivery",
            description="Webhook deliveries are queued behind a slow consumer.",
            status="identified",
            created_by=owner.id,
            affected_component_ids=[component_ids[2]],
        ),
    )
    await _call(
        incidents_service.create_incident_update,
        CreateIncidentUpdateInput(
            incident_id=incident.id,
            title="Backlog drained",
            description="Deliveries are back to normal latency.",
            status="resolved",
            created_by=owner.id,
        ),
    )

    start = (utc_now() + timedelta(days=7)).replace(minute=0, second=0, microsecond=0)
    await _call(
        maintenance_service.create_maintenance_window,
        CreateMaintenanceWindowInput(
            status_page_id=page.id,
            title="Database minor version upgrade",
            description="Brief read-only period during failover.",
            scheduled_start=start,
            scheduled_end=start + timedelta(hours=1),
            created_by=owner.id,
            affected_component_ids=[component_ids[0], component_ids[3]],
        ),
    )
    print(
        f"Seeded organization '{DEMO_ORG_SLUG}' with status page {page.id} "
        f"and {len(component_ids)} components."
    )
    return 0


def main() -> int:
    configure_logging()
    # Surface clear failures and exit non-zero so CI/dev scripts can detect issues.
    try:
        return asyncio.run(seed_demo())
    except Exception as exc:  # noqa: BLE001 - surface any setup or DB errors
        print(f"seed_demo failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
