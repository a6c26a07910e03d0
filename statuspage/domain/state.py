from __future__ import annotations

from enum import Enum


class PlanTier(str, Enum):
    FREE = "free"
    PRO = "pro"
    PLUS = "plus"
    ENTERPRISE = "enterprise"


class ResourceKind(str, Enum):
    STATUS_PAGES = "status_pages"
    COMPONENTS = "components"
    MEMBERS = "members"


class UserRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class ComponentStatus(str, Enum):
    OPERATIONAL = "operational"
    PERFORMANCE_ISSUES = "performance_issues"
    PARTIAL_OUTAGE = "partial_outage"
    MAJOR_OUTAGE = "major_outage"
    UNDER_MAINTENANCE = "under_maintenance"


class IncidentStatus(str, Enum):
    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    MONITORING = "monitoring"
    RESOLVED = "resolved"


class MaintenanceStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
