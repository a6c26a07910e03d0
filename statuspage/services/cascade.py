"""Dependency-ordered deletion of status pages and components.

A deletion plan is an ordered list of scoped DELETE statements. Steps run in
list order inside one transaction, so a failure part-way leaves nothing
deleted. Each step only deletes rows whose referencing rows were removed by
an earlier step.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from sqlalchemy import Delete, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.domain.models import (
    Component,
    Incident,
    IncidentAffectedComponent,
    IncidentUpdate,
    MaintenanceAffectedComponent,
    MaintenanceWindow,
    StatusPage,
)
from statuspage.persistence.db import transaction
from statuspage.persistence.repos import components as components_repo
from statuspage.persistence.repos import status_pages as status_pages_repo


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletionStep:
    name: str
    statement: Delete


@dataclass(frozen=True)
class DeletionPlan:
    root: str
    root_id: int
    steps: tuple[DeletionStep, ...]

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]


def build_status_page_deletion_plan(status_page_id: int) -> DeletionPlan:
    incident_ids = select(Incident.id).where(Incident.status_page_id == status_page_id)
    window_ids = select(MaintenanceWindow.id).where(
        MaintenanceWindow.status_page_id == status_page_id
    )
    steps = (
        DeletionStep(
            "incident_updates",
            delete(IncidentUpdate).where(IncidentUpdate.incident_id.in_(incident_ids)),
        ),
        DeletionStep(
            "incident_affected_components",
            delete(IncidentAffectedComponent).where(
                IncidentAffectedComponent.incident_id.in_(incident_ids)
            ),
        ),
        DeletionStep(
            "maintenance_affected_components",
            delete(MaintenanceAffectedComponent).where(
                MaintenanceAffectedComponent.maintenance_window_id.in_(window_ids)
            ),
        ),
        DeletionStep(
            "incidents",
            delete(Incident).where(Incident.status_page_id == status_page_id),
        ),
        DeletionStep(
            "maintenance_windows",
            delete(MaintenanceWindow).where(MaintenanceWindow.status_page_id == status_page_id),
        ),
        DeletionStep(
            "components",
            delete(Component).where(Component.status_page_id == status_page_id),
        ),
        DeletionStep(
            "status_page",
            delete(StatusPage).where(StatusPage.id == status_page_id),
        ),
    )
    return DeletionPlan(root="status_page", root_id=status_page_id, steps=steps)


def build_component_deletion_plan(component_id: int) -> DeletionPlan:
    # Parent incidents and maintenance windows are left in place.
    steps = (
        DeletionStep(
            "incident_affected_components",
            delete(IncidentAffectedComponent).where(
                IncidentAffectedComponent.component_id == component_id
            ),
        ),
        DeletionStep(
            "maintenance_affected_components",
            delete(MaintenanceAffectedComponent).where(
                MaintenanceAffectedComponent.component_id == component_id
            ),
        ),
        DeletionStep(
            "component",
            delete(Component).where(Component.id == component_id),
        ),
    )
    return DeletionPlan(root="component", root_id=component_id, steps=steps)


async def execute_plan(session: AsyncSession, plan: DeletionPlan) -> dict[str, int]:
    # Caller owns the transaction; steps run strictly in plan order.
    counts: dict[str, int] = {}
    for step in plan.steps:
        result = await session.execute(step.statement, execution_options={"synchronize_session": False})
        counts[step.name] = int(result.rowcount or 0)
        logger.debug(
            "cascade_step root=%s root_id=%s step=%s rows=%s",
            plan.root,
            plan.root_id,
            step.name,
            counts[step.name],
        )
    return counts


async def delete_status_page(session: AsyncSession, status_page_id: int) -> bool:
    """Delete a status page and everything scoped to it.

    Returns False when the page does not exist.
    """
    async with transaction(session):
        page = await status_pages_repo.lock_status_page(session, status_page_id)
        if page is None:
            return False
        counts = await execute_plan(session, build_status_page_deletion_plan(status_page_id))
    logger.info("status_page_deleted status_page_id=%s rows=%s", status_page_id, counts)
    return True


async def delete_component(session: AsyncSession, component_id: int) -> bool:
    """Delete a component and its junction rows. Returns False when absent."""
    async with transaction(session):
        component = await components_repo.get_component(session, component_id)
        if component is None:
            return False
        counts = await execute_plan(session, build_component_deletion_plan(component_id))
    logger.info("component_deleted component_id=%s rows=%s", component_id, counts)
    return counts.get("component", 0) > 0
