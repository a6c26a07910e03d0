from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from statuspage.domain.schemas import (
    CreateIncidentInput,
    CreateMaintenanceWindowInput,
    CreateUserInput,
    UpdateComponentInput,
    UpdateMaintenanceWindowInput,
    UpdateStatusPageInput,
)


def test_patch_only_carries_fields_that_were_sent() -> None:
    payload = UpdateStatusPageInput.model_validate({"name": "Renamed", "description": None})
    assert payload.to_patch() == {"name": "Renamed", "description": None}


def test_empty_patch_is_allowed() -> None:
    assert UpdateComponentInput.model_validate({}).to_patch() == {}


def test_slug_is_not_patchable() -> None:
    with pytest.raises(ValidationError):
        UpdateStatusPageInput.model_validate({"slug": "new-slug"})


def test_required_columns_cannot_be_nulled() -> None:
    with pytest.raises(ValidationError):
        UpdateComponentInput.model_validate({"status": None})


def test_enum_membership_is_enforced() -> None:
    with pytest.raises(ValidationError):
        UpdateComponentInput.model_validate({"status": "on_fire"})
    with pytest.raises(ValidationError):
        CreateIncidentInput.model_validate(
            {"status_page_id": 1, "title": "t", "description": "d", "status": "closed", "created_by": 1}
        )


def test_enum_values_are_stored_as_plain_strings() -> None:
    payload = UpdateComponentInput.model_validate({"status": "major_outage"})
    assert payload.to_patch() == {"status": "major_outage"}
    assert type(payload.to_patch()["status"]) is str


def test_incident_defaults() -> None:
    payload = CreateIncidentInput.model_validate(
        {"status_page_id": 1, "title": "Outage", "description": "d", "created_by": 1}
    )
    assert payload.status == "investigating"
    assert payload.affected_component_ids == []


def test_naive_maintenance_datetimes_are_treated_as_utc() -> None:
    payload = CreateMaintenanceWindowInput.model_validate(
        {
            "status_page_id": 1,
            "title": "Upgrade",
            "description": "d",
            "scheduled_start": "2030-01-01T02:00:00",
            "scheduled_end": "2030-01-01T04:00:00+02:00",
            "created_by": 1,
        }
    )
    assert payload.scheduled_start == datetime(2030, 1, 1, 2, tzinfo=timezone.utc)
    assert payload.scheduled_end == datetime(2030, 1, 1, 2, tzinfo=timezone.utc)


def test_explicit_null_actuals_are_kept_in_patch() -> None:
    patch = UpdateMaintenanceWindowInput.model_validate(
        {"status": "in_progress", "actual_start": None}
    ).to_patch()
    assert patch == {"status": "in_progress", "actual_start": None}


@pytest.mark.parametrize(
    "email", ["not-an-email", "two@@example.com", "user@nodot", "spaced out@example.com"]
)
def test_user_input_rejects_malformed_email(email: str) -> None:
    with pytest.raises(ValidationError):
        CreateUserInput.model_validate(
            {"email": email, "password": "longenough", "first_name": "a", "last_name": "b"}
        )


def test_user_input_enforces_password_length() -> None:
    with pytest.raises(ValidationError):
        CreateUserInput.model_validate(
            {"email": "a@b.io", "password": "short", "first_name": "a", "last_name": "b"}
        )
