from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from statuspage.core.errors import ReferentialViolationError
from statuspage.persistence.guards import translate_integrity_error
from statuspage.persistence.repos import affected_components as links_repo
from statuspage.persistence.repos import components as components_repo


logger = logging.getLogger(__name__)


def dedupe_ids(component_ids: Iterable[int]) -> list[int]:
    # Keep first-seen order so junction rows mirror the request.
    seen: set[int] = set()
    ordered: list[int] = []
    for component_id in component_ids:
        if component_id in seen:
            continue
        seen.add(component_id)
        ordered.append(component_id)
    return ordered


async def validate_maintenance_components(
    session: AsyncSession, status_page_id: int, component_ids: Sequence[int]
) -> list[int]:
    """Check every id exists on the given status page; raise listing every offender."""
    ids = dedupe_ids(component_ids)
    if not ids:
        return ids
    valid = await components_repo.list_component_ids_on_page(session, status_page_id, ids)
    invalid = [component_id for component_id in ids if component_id not in valid]
    if invalid:
        raise ReferentialViolationError(
            f"Components with ids {', '.join(str(i) for i in invalid)} "
            "not found or do not belong to the status page",
            details={"component_ids": invalid, "status_page_id": status_page_id},
        )
    return ids


async def link_maintenance_components(
    session: AsyncSession, maintenance_window_id: int, component_ids: Sequence[int]
) -> list[int]:
    # Ids must already be validated against the window's status page.
    ids = dedupe_ids(component_ids)
    if ids:
        await links_repo.add_maintenance_links(session, maintenance_window_id, ids)
        logger.debug(
            "maintenance_components_linked maintenance_window_id=%s count=%s",
            maintenance_window_id,
            len(ids),
        )
    return ids


async def link_incident_components(
    session: AsyncSession, incident_id: int, component_ids: Sequence[int]
) -> list[int]:
    """Insert incident junction rows, relying on the FK constraint for existence.

    Missing ids surface as a single raw foreign-key error, not an itemized list.
    """
    ids = dedupe_ids(component_ids)
    if not ids:
        return ids
    try:
        await links_repo.add_incident_links(session, incident_id, ids)
    except IntegrityError as exc:
        raise translate_integrity_error(exc) from exc
    logger.debug("incident_components_linked incident_id=%s count=%s", incident_id, len(ids))
    return ids
