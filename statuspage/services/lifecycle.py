"""Status lifecycle rules for incidents and maintenance windows.

Transitions are pure: they take the previous and requested status and return
the timestamp side effects to apply. Callers merge the resulting patch over
the fields they were asked to change, so derived values land in the same
write as the status change.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from statuspage.domain.state import IncidentStatus, MaintenanceStatus


@dataclass(frozen=True)
class SetTimestamp:
    field: str
    value: datetime


@dataclass(frozen=True)
class ClearTimestamp:
    field: str


TimestampEffect = Union[SetTimestamp, ClearTimestamp]


@dataclass(frozen=True)
class DerivedPatch:
    effects: tuple[TimestampEffect, ...] = ()

    def as_dict(self) -> dict[str, datetime | None]:
        patch: dict[str, datetime | None] = {}
        for effect in self.effects:
            if isinstance(effect, SetTimestamp):
                patch[effect.field] = effect.value
            else:
                patch[effect.field] = None
        return patch

    def __bool__(self) -> bool:
        return bool(self.effects)


_MAINTENANCE_END_STATES = {MaintenanceStatus.COMPLETED, MaintenanceStatus.CANCELLED}


def incident_transition(
    old_status: IncidentStatus | str | None,
    new_status: IncidentStatus | str,
    *,
    now: datetime,
) -> DerivedPatch:
    """Derive resolved_at for an incident moving from old_status to new_status.

    Any transition is legal. Every move to resolved stamps resolved_at with
    now, including a repeated resolved; every other target clears it.
    old_status is None for a brand new incident.
    """
    new = IncidentStatus(new_status)
    if old_status is not None:
        IncidentStatus(old_status)  # reject unknown stored values
    if new is IncidentStatus.RESOLVED:
        return DerivedPatch((SetTimestamp("resolved_at", now),))
    return DerivedPatch((ClearTimestamp("resolved_at"),))


def maintenance_transition(
    old_status: MaintenanceStatus | str,
    new_status: MaintenanceStatus | str,
    *,
    overrides: Mapping[str, Any] | None = None,
    now: datetime,
) -> DerivedPatch:
    """Derive actual_start/actual_end for a maintenance window status change.

    A non-null actual_* value in overrides wins over the derived stamp; a null
    one does not, so the window never lands in progress or finished without
    it. scheduled always clears both.
    """
    overrides = overrides or {}
    new = MaintenanceStatus(new_status)
    old = MaintenanceStatus(old_status)
    if new is MaintenanceStatus.SCHEDULED:
        return DerivedPatch((ClearTimestamp("actual_start"), ClearTimestamp("actual_end")))
    if new is MaintenanceStatus.IN_PROGRESS:
        field = "actual_start"
    elif new in _MAINTENANCE_END_STATES:
        field = "actual_end"
    else:
        return DerivedPatch()
    if overrides.get(field) is not None:
        return DerivedPatch()
    # A repeated status keeps its stamp unless the caller is nulling it out.
    if new is old and field not in overrides:
        return DerivedPatch()
    return DerivedPatch((SetTimestamp(field, now),))
