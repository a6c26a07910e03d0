from __future__ import annotations

import pytest

from statuspage.domain.models import (
    Component,
    Incident,
    IncidentAffectedComponent,
    IncidentUpdate,
    MaintenanceAffectedComponent,
    MaintenanceWindow,
    StatusPage,
)
from statuspage.domain.schemas import (
    CreateIncidentInput,
    CreateIncidentUpdateInput,
    CreateMaintenanceWindowInput,
)
from statuspage.services import cascade
from statuspage.services import incidents as incidents_service
from statuspage.services import maintenance as maintenance_service
from statuspage.tests.utils.factories import (
    call_service,
    count_rows,
    create_test_component,
    create_test_organization,
    create_test_status_page,
    create_test_user,
    utc,
)


async def _populate(page_id: int, user_id: int) -> dict[str, int]:
    # One of everything hanging off the page, both junction tables included.
    component = await create_test_component(status_page_id=page_id)
    incident = await call_service(
        incidents_service.create_incident,
        CreateIncidentInput(
            status_page_id=page_id,
            title="Outage",
            description="d",
            created_by=user_id,
            affected_component_ids=[component.id],
        ),
    )
    await call_service(
        incidents_service.create_incident_update,
        CreateIncidentUpdateInput(
            incident_id=incident.id,
            title="Identified",
            description="d",
            status="identified",
            created_by=user_id,
        ),
    )
    window = await call_service(
        maintenance_service.create_maintenance_window,
        CreateMaintenanceWindowInput(
            status_page_id=page_id,
            title="Upgrade",
            description="d",
            scheduled_start=utc(2030, 1, 1, 2),
            scheduled_end=utc(2030, 1, 1, 4),
            created_by=user_id,
            affected_component_ids=[component.id],
        ),
    )
    return {"component": component.id, "incident": incident.id, "window": window.id}


@pytest.mark.asyncio
async def test_delete_status_page_removes_descendants_only() -> None:
    user = await create_test_user()
    organization = await create_test_organization(plan_type="enterprise")
    doomed = await create_test_status_page(organization_id=organization.id)
    sibling = await create_test_status_page(organization_id=organization.id)
    doomed_ids = await _populate(doomed.id, user.id)
    sibling_ids = await _populate(sibling.id, user.id)

    assert await call_service(cascade.delete_status_page, doomed.id) is True

    assert await count_rows(StatusPage, StatusPage.id == doomed.id) == 0
    assert await count_rows(Component, Component.status_page_id == doomed.id) == 0
    assert await count_rows(Incident, Incident.status_page_id == doomed.id) == 0
    assert await count_rows(IncidentUpdate, IncidentUpdate.incident_id == doomed_ids["incident"]) == 0
    assert await count_rows(MaintenanceWindow, MaintenanceWindow.status_page_id == doomed.id) == 0
    assert (
        await count_rows(
            IncidentAffectedComponent,
            IncidentAffectedComponent.incident_id == doomed_ids["incident"],
        )
        == 0
    )
    assert (
        await count_rows(
            MaintenanceAffectedComponent,
            MaintenanceAffectedComponent.maintenance_window_id == doomed_ids["window"],
        )
        == 0
    )

    # The sibling page keeps every row.
    assert await count_rows(StatusPage, StatusPage.id == sibling.id) == 1
    assert await count_rows(Component, Component.status_page_id == sibling.id) == 1
    assert await count_rows(Incident, Incident.status_page_id == sibling.id) == 1
    assert await count_rows(IncidentUpdate, IncidentUpdate.incident_id == sibling_ids["incident"]) == 1
    assert await count_rows(MaintenanceWindow, MaintenanceWindow.status_page_id == sibling.id) == 1
    assert await count_rows(IncidentAffectedComponent) == 1
    assert await count_rows(MaintenanceAffectedComponent) == 1


@pytest.mark.asyncio
async def test_delete_missing_status_page_returns_false() -> None:
    assert await call_service(cascade.delete_status_page, 999999) is False


@pytest.mark.asyncio
async def test_delete_component_keeps_parent_records() -> None:
    user = await create_test_user()
    page = await create_test_status_page()
    ids = await _populate(page.id, user.id)
    survivor = await create_test_component(status_page_id=page.id, name="Survivor")

    assert await call_service(cascade.delete_component, ids["component"]) is True

    assert await count_rows(Component, Component.id == ids["component"]) == 0
    assert await count_rows(Component, Component.id == survivor.id) == 1
    assert await count_rows(IncidentAffectedComponent) == 0
    assert await count_rows(MaintenanceAffectedComponent) == 0
    assert await count_rows(Incident, Incident.id == ids["incident"]) == 1
    assert await count_rows(MaintenanceWindow, MaintenanceWindow.id == ids["window"]) == 1


@pytest.mark.asyncio
async def test_delete_missing_component_returns_false() -> None:
    assert await call_service(cascade.delete_component, 999999) is False
