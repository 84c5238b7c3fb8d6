from __future__ import annotations

import json

import pytest

import main
from infra.config import Settings
from infra.services import build_service_graph


@pytest.fixture
def graph_factory(session_factory, events, support):
    def _build():
        settings = Settings(database_url="sqlite:///:memory:", trigger_mode="sync")
        return build_service_graph(session_factory, settings, support=support, events=events)

    return _build


def _seed(graph_factory):
    graph = graph_factory()
    try:
        project = graph.project_service.create_project("CLI", actual_budget=500, planned_budget=400)
        supplier = graph.supplier_service.create_supplier("Vendor", "123")
        graph.invoice_service.create_invoice(project.id, supplier.id, 120)
        return project.id
    finally:
        graph.close()


def test_summary_prints_json(graph_factory, capsys):
    project_id = _seed(graph_factory)

    exit_code = main.main(["summary", project_id], graph_factory=graph_factory)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["spent_on_invoices"] == 120.0
    assert payload["remaining_cost"] == 380.0
    assert payload["budget_variance_percent"] == 25.0


def test_summary_of_unknown_project_fails(graph_factory, capsys):
    exit_code = main.main(["summary", "missing"], graph_factory=graph_factory)

    assert exit_code == 2
    assert "PROJECT_NOT_FOUND" in capsys.readouterr().err


def test_recompute_all(graph_factory, capsys):
    project_id = _seed(graph_factory)

    exit_code = main.main(["recompute", "--all"], graph_factory=graph_factory)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload == [{"project_id": project_id, "status": "updated", "total": 120.0, "error": None}]


def test_recompute_unknown_project_reports_failure(graph_factory, capsys):
    exit_code = main.main(["recompute", "--project", "missing"], graph_factory=graph_factory)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload[0]["status"] == "failed"


def test_overview(graph_factory, capsys):
    _seed(graph_factory)

    exit_code = main.main(["overview"], graph_factory=graph_factory)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload[0]["spent"] == 120.0
    assert payload[0]["remaining"] == 380.0


def test_recompute_requires_a_target():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["recompute"])


def test_department_invoices_lists_rows_with_supplier_names(graph_factory, capsys):
    graph = graph_factory()
    try:
        supplier = graph.supplier_service.create_supplier("Stationery Ltd", "7705551234")
        graph.department_invoice_service.create_department_invoice(
            "Office", "Supplies", supplier.id, 45, submitter_uid="u-7"
        )
    finally:
        graph.close()

    exit_code = main.main(["department-invoices", "u-7"], graph_factory=graph_factory)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload[0]["category"] == "Office / Supplies"
    assert payload[0]["supplier"] == "Stationery Ltd"
    assert payload[0]["status"] == "pending_payment"
