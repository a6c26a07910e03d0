from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.errors import NotFoundError
from statuspage.domain.models import Incident, IncidentUpdate, utc_now
from statuspage.domain.schemas import (
    CreateIncidentInput,
    CreateIncidentUpdateInput,
    UpdateIncidentInput,
)
from statuspage.persistence.db import transaction
from statuspage.persistence.guards import translate_integrity_error
from statuspage.persistence.repos import incidents as incidents_repo
from statuspage.persistence.repos.common import apply_patch
from statuspage.services.affected_components import link_incident_components
from statuspage.services.lifecycle import incident_transition


logger = logging.getLogger(__name__)


async def create_incident(session: AsyncSession, payload: CreateIncidentInput) -> Incident:
    """Create an incident and link its affected components.

    Status page, creator and component ids are checked by the foreign keys
    only; a bad id fails the whole create with the raw constraint message.
    """
    now = utc_now()
    derived = incident_transition(None, payload.status, now=now).as_dict()
    async with transaction(session):
        try:
            incident = await incidents_repo.create_incident(
                session,
                status_page_id=payload.status_page_id,
                title=payload.title,
                description=payload.description,
                status=payload.status,
                created_by=payload.created_by,
                resolved_at=derived.get("resolved_at"),
            )
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        await link_incident_components(session, incident.id, payload.affected_component_ids)
    logger.info(
        "incident_created incident_id=%s status_page_id=%s status=%s",
        incident.id,
        incident.status_page_id,
        incident.status,
    )
    return incident


async def get_incidents(session: AsyncSession, status_page_id: int) -> list[Incident]:
    return await incidents_repo.list_incidents(session, status_page_id)


async def update_incident(
    session: AsyncSession, incident_id: int, payload: UpdateIncidentInput
) -> Incident:
    patch = payload.to_patch()
    now = utc_now()
    async with transaction(session):
        incident = await incidents_repo.get_incident(session, incident_id)
        if incident is None:
            raise NotFoundError("Incident", incident_id)
        if "status" in patch:
            patch.update(incident_transition(incident.status, patch["status"], now=now).as_dict())
        apply_patch(incident, patch, now=now)
    logger.info("incident_updated incident_id=%s fields=%s", incident_id, sorted(patch))
    return incident


async def create_incident_update(
    session: AsyncSession, payload: CreateIncidentUpdateInput
) -> IncidentUpdate:
    """Append an update and move the parent incident to the update's status.

    Both writes commit together or not at all.
    """
    now = utc_now()
    async with transaction(session):
        try:
            update = await incidents_repo.create_incident_update(
                session,
                incident_id=payload.incident_id,
                title=payload.title,
                description=payload.description,
                status=payload.status,
                created_by=payload.created_by,
            )
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        incident = await incidents_repo.lock_incident(session, payload.incident_id)
        if incident is None:
            raise NotFoundError("Incident", payload.incident_id)
        patch = {"status": payload.status}
        patch.update(incident_transition(incident.status, payload.status, now=now).as_dict())
        apply_patch(incident, patch, now=now)
    logger.info(
        "incident_update_created incident_update_id=%s incident_id=%s status=%s",
        update.id,
        payload.incident_id,
        payload.status,
    )
    return update


async def get_incident_updates(session: AsyncSession, incident_id: int) -> list[IncidentUpdate]:
    return await incidents_repo.list_incident_updates(session, incident_id)
