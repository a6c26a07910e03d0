from __future__ import annotations

import logging

from statuspage.core.errors import QuotaExceededError
from statuspage.domain.state import PlanTier, ResourceKind


logger = logging.getLogger(__name__)

# Single source of truth for plan entitlements; None means unlimited.
PLAN_LIMITS: dict[PlanTier, dict[ResourceKind, int | None]] = {
    PlanTier.FREE: {
        ResourceKind.STATUS_PAGES: 1,
        ResourceKind.COMPONENTS: 7,
        ResourceKind.MEMBERS: 7,
    },
    PlanTier.PRO: {
        ResourceKind.STATUS_PAGES: 3,
        ResourceKind.COMPONENTS: 36,
        ResourceKind.MEMBERS: 35,
    },
    PlanTier.PLUS: {
        ResourceKind.STATUS_PAGES: 12,
        ResourceKind.COMPONENTS: 60,
        ResourceKind.MEMBERS: 50,
    },
    PlanTier.ENTERPRISE: {
        ResourceKind.STATUS_PAGES: 100,
        ResourceKind.COMPONENTS: None,
        ResourceKind.MEMBERS: None,
    },
}

_MESSAGES: dict[ResourceKind, str] = {
    ResourceKind.STATUS_PAGES: "Plan limit exceeded. {plan} plan allows maximum {limit} status pages",
    ResourceKind.COMPONENTS: "Component limit exceeded for {plan} plan (maximum {limit} components)",
    ResourceKind.MEMBERS: (
        "Organization has reached the member limit for the {plan} plan ({limit} members)"
    ),
}


def get_limit(plan_tier: PlanTier | str, resource_kind: ResourceKind | str) -> int | None:
    # Unknown plan ids raise ValueError; the validation layer should never let one through.
    return PLAN_LIMITS[PlanTier(plan_tier)][ResourceKind(resource_kind)]


def check_quota(
    plan_tier: PlanTier | str, resource_kind: ResourceKind | str, current_count: int
) -> bool:
    """Return True when one more resource fits under the plan limit."""
    limit = get_limit(plan_tier, resource_kind)
    if limit is None:
        return True
    return current_count < limit


def enforce_quota(
    plan_tier: PlanTier | str, resource_kind: ResourceKind | str, current_count: int
) -> None:
    """Raise QuotaExceededError when creating one more resource would pass the limit."""
    if check_quota(plan_tier, resource_kind, current_count):
        return
    plan = PlanTier(plan_tier)
    kind = ResourceKind(resource_kind)
    limit = PLAN_LIMITS[plan][kind]
    logger.warning(
        "quota_exceeded plan=%s kind=%s limit=%s current=%s",
        plan.value,
        kind.value,
        limit,
        current_count,
    )
    raise QuotaExceededError(
        _MESSAGES[kind].format(plan=plan.value, limit=limit),
        plan_tier=plan.value,
        resource_kind=kind.value,
        limit=int(limit),
    )
