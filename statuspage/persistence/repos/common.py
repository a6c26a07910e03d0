from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from statuspage.domain.models import utc_now


def apply_patch(entity: Any, patch: Mapping[str, Any], *, now: datetime | None = None) -> Any:
    # Apply only the keys present in the patch; an empty patch still bumps updated_at.
    for field, value in patch.items():
        setattr(entity, field, value)
    if hasattr(entity, "updated_at"):
        entity.updated_at = now or utc_now()
    return entity
