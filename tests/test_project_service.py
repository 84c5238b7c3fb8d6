from __future__ import annotations

import pytest

from core.domain import ProjectStatus
from core.exceptions import ConcurrencyError, NotFoundError, ValidationError


def test_create_project_with_financials(services):
    ps = services["project_service"]

    project = ps.create_project(
        "  Bridge  ",
        number="PRJ-7",
        customer="City",
        planned_budget=1000,
        actual_budget=1200.5,
    )

    assert project.name == "Bridge"
    assert project.status == ProjectStatus.PLANNING
    assert project.total_non_cancelled_invoice_amount == 0.0
    stored = ps.get_project(project.id)
    assert stored.planned_budget == 1000.0
    assert stored.actual_budget == 1200.5
    assert stored.planned_revenue is None


def test_create_project_validation(services):
    ps = services["project_service"]

    with pytest.raises(ValidationError) as exc_info:
        ps.create_project("   ")
    assert exc_info.value.code == "PROJECT_NAME_EMPTY"

    with pytest.raises(ValidationError) as exc_info:
        ps.create_project("Negative", usn_tax=-1)
    assert exc_info.value.code == "PROJECT_FINANCIAL_NEGATIVE"

    with pytest.raises(ValidationError) as exc_info:
        ps.create_project("Text", planned_budget="lots")
    assert exc_info.value.code == "PROJECT_FINANCIAL_INVALID"

    with pytest.raises(ValidationError) as exc_info:
        ps.create_project("Unknown", bonus=5)
    assert exc_info.value.code == "PROJECT_FIELD_UNKNOWN"


def test_aggregate_field_is_not_caller_writable(services):
    ps = services["project_service"]
    project = ps.create_project("Locked total")

    with pytest.raises(ValidationError) as exc_info:
        ps.update_project(project.id, total_non_cancelled_invoice_amount=10.0)

    assert exc_info.value.code == "PROJECT_FIELD_NOT_UPDATABLE"


def test_update_project_keeps_aggregate(services, project_with_supplier, stored_total):
    ps = services["project_service"]
    project, supplier = project_with_supplier
    services["invoice_service"].create_invoice(project.id, supplier.id, 400)

    ps.update_project(project.id, name="Warehouse 2", actual_budget=2000)

    assert stored_total(project.id) == 400.0
    assert ps.get_project(project.id).total_non_cancelled_invoice_amount == 400.0


def test_project_update_rejects_stale_expected_version(services):
    ps = services["project_service"]

    project = ps.create_project("Lock Project")
    updated = ps.update_project(project.id, name="Lock Project v2")

    assert updated.version == 2
    with pytest.raises(ConcurrencyError):
        ps.update_project(project.id, name="stale", expected_version=1)


def test_set_status_and_missing_project(services):
    ps = services["project_service"]
    project = ps.create_project("Status")

    assert ps.set_status(project.id, ProjectStatus.IN_PROGRESS).status == ProjectStatus.IN_PROGRESS
    with pytest.raises(NotFoundError):
        ps.get_project("missing")
    with pytest.raises(NotFoundError):
        ps.update_project("missing", name="x")


def test_project_changes_emit_project_changed(services):
    ps = services["project_service"]
    seen: list[str] = []
    services["events"].project_changed.connect(seen.append)

    project = ps.create_project("Event Project")
    ps.update_project(project.id, description="updated")

    assert seen == [project.id, project.id]


def test_list_projects_sorted_by_name(services):
    ps = services["project_service"]
    ps.create_project("Beta")
    ps.create_project("Alpha")

    assert [p.name for p in ps.list_projects()] == ["Alpha", "Beta"]
