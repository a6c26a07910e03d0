from __future__ import annotations

from typing import Any


class StatusPageError(Exception):
    """Base error for the status page platform."""

    code = "STATUS_PAGE_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(StatusPageError):
    """A referenced entity id does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(
            f"{entity} with id {entity_id} not found",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class QuotaExceededError(StatusPageError):
    """Plan tier limit reached for a quota-bound resource."""

    code = "QUOTA_EXCEEDED"

    def __init__(self, message: str, *, plan_tier: str, resource_kind: str, limit: int) -> None:
        super().__init__(
            message,
            details={"plan_tier": plan_tier, "resource_kind": resource_kind, "limit": limit},
        )
        self.plan_tier = plan_tier
        self.resource_kind = resource_kind
        self.limit = limit


class ConflictError(StatusPageError):
    """Duplicate unique key."""

    code = "CONFLICT"


class ReferentialViolationError(StatusPageError):
    """A referenced foreign key does not exist."""

    code = "REFERENTIAL_VIOLATION"


class DatabaseError(StatusPageError):
    """Database layer failure."""

    code = "DATABASE_ERROR"
