from __future__ import annotations

from typing import Iterable

from core.services.finance.models import FinancialSummary, ProjectFinancials


def percent_of(numerator: float, denominator: float) -> float | None:
    """``numerator / denominator * 100``; ``None`` when the denominator is 0."""
    if denominator == 0:
        return None
    return numerator / denominator * 100


def margin_percent(revenue: float, cost: float) -> float | None:
    return percent_of(revenue - cost, revenue)


def compute_financial_summary(
    project: ProjectFinancials,
    non_cancelled_invoice_amounts: Iterable[float | None],
) -> FinancialSummary:
    spent_on_invoices = sum(float(amount or 0.0) for amount in non_cancelled_invoice_amounts)
    total_spent = spent_on_invoices + project.usn_tax + project.nds_tax

    budget_variance = project.actual_budget - project.planned_budget
    revenue_variance = project.actual_revenue - project.planned_revenue

    planned_margin = margin_percent(project.planned_revenue, project.planned_budget)
    actual_margin = margin_percent(project.actual_revenue, project.actual_budget)
    margin_variance = None
    if planned_margin is not None and actual_margin is not None:
        margin_variance = actual_margin - planned_margin

    gross_profit = project.actual_revenue - project.actual_budget

    return FinancialSummary(
        spent_on_invoices=spent_on_invoices,
        total_spent=total_spent,
        remaining_cost=project.actual_budget - total_spent,
        budget_variance=budget_variance,
        budget_variance_percent=percent_of(budget_variance, project.planned_budget),
        revenue_variance=revenue_variance,
        revenue_variance_percent=percent_of(revenue_variance, project.planned_revenue),
        planned_margin=planned_margin,
        actual_margin=actual_margin,
        margin_variance_percent=margin_variance,
        gross_profit=gross_profit,
        estimated_net_profit=gross_profit - project.usn_tax - project.nds_tax,
    )


__all__ = ["compute_financial_summary", "percent_of", "margin_percent"]
