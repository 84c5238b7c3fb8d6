import pytest

from core.domain import Project
from core.services.finance import ProjectFinancials, compute_financial_summary
from core.services.finance.summary import margin_percent, percent_of


def _financials(**values) -> ProjectFinancials:
    return ProjectFinancials(**values)


def test_summary_matches_reference_project():
    project = _financials(
        planned_budget=100000.0,
        actual_budget=120000.0,
        planned_revenue=150000.0,
        actual_revenue=160000.0,
        usn_tax=3000.0,
        nds_tax=0.0,
    )

    summary = compute_financial_summary(project, [50000.0, 40000.0])

    assert summary.spent_on_invoices == 90000.0
    assert summary.total_spent == 93000.0
    assert summary.remaining_cost == 27000.0
    assert summary.budget_variance == 20000.0
    assert summary.budget_variance_percent == pytest.approx(20.0)
    assert summary.revenue_variance == 10000.0
    assert summary.revenue_variance_percent == pytest.approx(100 * 10000 / 150000)
    assert summary.planned_margin == pytest.approx(100 * 50000 / 150000)
    assert summary.actual_margin == pytest.approx(25.0)
    assert summary.margin_variance_percent == pytest.approx(25.0 - 100 * 50000 / 150000)
    assert summary.gross_profit == 40000.0
    assert summary.estimated_net_profit == 37000.0


def test_zero_planned_revenue_leaves_revenue_ratios_undefined():
    project = _financials(
        planned_budget=100000.0,
        actual_budget=90000.0,
        planned_revenue=0.0,
        actual_revenue=200000.0,
    )

    summary = compute_financial_summary(project, [])

    assert summary.revenue_variance_percent is None
    assert summary.planned_margin is None
    assert summary.margin_variance_percent is None
    assert summary.actual_margin == pytest.approx(55.0)
    assert summary.revenue_variance == 200000.0


def test_zero_planned_budget_leaves_budget_variance_percent_undefined():
    summary = compute_financial_summary(_financials(actual_budget=500.0), [100.0])

    assert summary.budget_variance == 500.0
    assert summary.budget_variance_percent is None


def test_empty_project_produces_zero_figures():
    summary = compute_financial_summary(_financials(), [])

    assert summary.spent_on_invoices == 0.0
    assert summary.total_spent == 0.0
    assert summary.remaining_cost == 0.0
    assert summary.gross_profit == 0.0
    assert summary.actual_margin is None


def test_absent_project_figures_count_as_zero():
    project = Project.create("Bare", planned_budget=None, actual_budget=None, usn_tax=None, nds_tax=250.0)

    financials = ProjectFinancials.from_project(project)
    summary = compute_financial_summary(financials, [None, 100.0])

    assert financials.planned_budget == 0.0
    assert financials.nds_tax == 250.0
    assert summary.spent_on_invoices == 100.0
    assert summary.total_spent == 350.0
    assert summary.remaining_cost == -350.0


def test_overspent_project_has_negative_remaining_cost():
    summary = compute_financial_summary(_financials(actual_budget=1000.0, nds_tax=200.0), [900.0])

    assert summary.total_spent == 1100.0
    assert summary.remaining_cost == -100.0


def test_summary_as_dict_exposes_every_metric():
    payload = compute_financial_summary(_financials(planned_revenue=10.0), [1.0]).as_dict()

    assert set(payload) == {
        "spent_on_invoices",
        "total_spent",
        "remaining_cost",
        "budget_variance",
        "budget_variance_percent",
        "revenue_variance",
        "revenue_variance_percent",
        "planned_margin",
        "actual_margin",
        "margin_variance_percent",
        "gross_profit",
        "estimated_net_profit",
    }
    assert payload["planned_margin"] == pytest.approx(100.0)


def test_percent_helpers_guard_zero_denominator():
    assert percent_of(5.0, 0.0) is None
    assert percent_of(5.0, 20.0) == pytest.approx(25.0)
    assert margin_percent(0.0, 100.0) is None
    assert margin_percent(200.0, 150.0) == pytest.approx(25.0)
