from __future__ import annotations

from statuspage.services.cascade import (
    build_component_deletion_plan,
    build_status_page_deletion_plan,
)


def test_status_page_plan_deletes_children_before_parents() -> None:
    plan = build_status_page_deletion_plan(42)
    assert plan.root == "status_page"
    assert plan.root_id == 42
    assert plan.step_names == [
        "incident_updates",
        "incident_affected_components",
        "maintenance_affected_components",
        "incidents",
        "maintenance_windows",
        "components",
        "status_page",
    ]


def test_status_page_plan_statements_target_expected_tables() -> None:
    plan = build_status_page_deletion_plan(7)
    tables = [step.statement.table.name for step in plan.steps]
    assert tables == [
        "incident_updates",
        "incident_affected_components",
        "maintenance_affected_components",
        "incidents",
        "maintenance_windows",
        "components",
        "status_pages",
    ]


def test_component_plan_only_touches_junctions_and_component() -> None:
    plan = build_component_deletion_plan(5)
    assert plan.step_names == [
        "incident_affected_components",
        "maintenance_affected_components",
        "component",
    ]
    assert "incidents" not in [step.statement.table.name for step in plan.steps]
