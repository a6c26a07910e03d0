from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from statuspage.domain.state import (
    ComponentStatus,
    IncidentStatus,
    MaintenanceStatus,
    PlanTier,
    UserRole,
)


# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _as_utc(value: datetime | None) -> datetime | None:
    # Treat naive client datetimes as UTC so stored and echoed values agree.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _Input(BaseModel):
    # Reject unknown fields so ids and derived columns cannot be smuggled in.
    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class _Patch(_Input):
    """Sparse update: only fields present in the payload are applied."""

    # Fields that may be omitted but never explicitly nulled.
    non_nullable_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for field in self.non_nullable_fields:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} may not be null")
        return self

    def to_patch(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# Inputs


class CreateUserInput(_Input):
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str
    last_name: str
    role: UserRole = UserRole.MEMBER

    @field_validator("password")
    @classmethod
    def _password_fits_hash_input(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password may not exceed {MAX_PASSWORD_BYTES} bytes")
        return value


class CreateOrganizationInput(_Input):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    plan_type: PlanTier = PlanTier.FREE
    owner_id: int


class AddOrganizationMemberInput(_Input):
    user_id: int
    role: UserRole = UserRole.MEMBER


class CreateStatusPageInput(_Input):
    organization_id: int
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str | None = None
    custom_domain: str | None = None
    branding_logo_url: str | None = None
    branding_primary_color: str | None = None
    branding_secondary_color: str | None = None
    is_public: bool = True


class UpdateStatusPageInput(_Patch):
    non_nullable_fields = ("name", "is_public")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    custom_domain: str | None = None
    branding_logo_url: str | None = None
    branding_primary_color: str | None = None
    branding_secondary_color: str | None = None
    is_public: bool | None = None


class CreateComponentInput(_Input):
    status_page_id: int
    name: str = Field(min_length=1)
    description: str | None = None
    status: ComponentStatus = ComponentStatus.OPERATIONAL
    position: int = 0


class UpdateComponentInput(_Patch):
    non_nullable_fields = ("name", "status", "position")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ComponentStatus | None = None
    position: int | None = None


class CreateIncidentInput(_Input):
    status_page_id: int
    title: str = Field(min_length=1)
    description: str
    status: IncidentStatus = IncidentStatus.INVESTIGATING
    created_by: int
    affected_component_ids: list[int] = Field(default_factory=list)


class UpdateIncidentInput(_Patch):
    non_nullable_fields = ("title", "description", "status")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: IncidentStatus | None = None


class CreateIncidentUpdateInput(_Input):
    incident_id: int
    title: str = Field(min_length=1)
    description: str
    status: IncidentStatus
    created_by: int


class CreateMaintenanceWindowInput(_Input):
    status_page_id: int
    title: str = Field(min_length=1)
    description: str
    scheduled_start: datetime
    scheduled_end: datetime
    created_by: int
    affected_component_ids: list[int] = Field(default_factory=list)

    @field_validator("scheduled_start", "scheduled_end")
    @classmethod
    def _normalize_datetimes(cls, value: datetime) -> datetime:
        return _as_utc(value)


class UpdateMaintenanceWindowInput(_Patch):
    non_nullable_fields = ("title", "description", "status", "scheduled_start", "scheduled_end")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: MaintenanceStatus | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    actual_start: datetime | None = None
    actual_end: datetime | None = None

    @field_validator("scheduled_start", "scheduled_end", "actual_start", "actual_end")
    @classmethod
    def _normalize_datetimes(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


# Outputs


class _Output(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserResponse(_Output):
    # password_hash is deliberately absent from every response.
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class OrganizationResponse(_Output):
    id: int
    name: str
    slug: str
    plan_type: str
    owner_id: int
    created_at: datetime
    updated_at: datetime


class OrganizationMemberResponse(_Output):
    id: int
    organization_id: int
    user_id: int
    role: str
    created_at: datetime


class StatusPageResponse(_Output):
    id: int
    organization_id: int
    name: str
    slug: str
    description: str | None
    custom_domain: str | None
    branding_logo_url: str | None
    branding_primary_color: str | None
    branding_secondary_color: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime


class ComponentResponse(_Output):
    id: int
    status_page_id: int
    name: str
    description: str | None
    status: str
    position: int
    created_at: datetime
    updated_at: datetime


class IncidentResponse(_Output):
    id: int
    status_page_id: int
    title: str
    description: str
    status: str
    created_by: int
    created_at: datetime
    updated_at: datetime
    resolved_at: datetime | None


class IncidentUpdateResponse(_Output):
    id: int
    incident_id: int
    title: str
    description: str
    status: str
    created_by: int
    created_at: datetime


class MaintenanceWindowResponse(_Output):
    id: int
    status_page_id: int
    title: str
    description: str
    status: str
    scheduled_start: datetime
    scheduled_end: datetime
    actual_start: datetime | None
    actual_end: datetime | None
    created_by: int
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    deleted: bool
