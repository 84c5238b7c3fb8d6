from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _number(value: Any) -> float:
    return float(value or 0.0)


@dataclass(frozen=True)
class ProjectFinancials:
    """Plan/fact figures of a project; absent values are already 0."""

    planned_budget: float = 0.0
    actual_budget: float = 0.0
    planned_revenue: float = 0.0
    actual_revenue: float = 0.0
    usn_tax: float = 0.0
    nds_tax: float = 0.0

    @staticmethod
    def from_project(project: object) -> "ProjectFinancials":
        return ProjectFinancials(
            planned_budget=_number(getattr(project, "planned_budget", None)),
            actual_budget=_number(getattr(project, "actual_budget", None)),
            planned_revenue=_number(getattr(project, "planned_revenue", None)),
            actual_revenue=_number(getattr(project, "actual_revenue", None)),
            usn_tax=_number(getattr(project, "usn_tax", None)),
            nds_tax=_number(getattr(project, "nds_tax", None)),
        )


@dataclass(frozen=True)
class FinancialSummary:
    spent_on_invoices: float
    total_spent: float
    remaining_cost: float
    budget_variance: float
    budget_variance_percent: float | None
    revenue_variance: float
    revenue_variance_percent: float | None
    planned_margin: float | None
    actual_margin: float | None
    margin_variance_percent: float | None
    gross_profit: float
    estimated_net_profit: float

    def as_dict(self) -> dict[str, float | None]:
        return {
            "spent_on_invoices": self.spent_on_invoices,
            "total_spent": self.total_spent,
            "remaining_cost": self.remaining_cost,
            "budget_variance": self.budget_variance,
            "budget_variance_percent": self.budget_variance_percent,
            "revenue_variance": self.revenue_variance,
            "revenue_variance_percent": self.revenue_variance_percent,
            "planned_margin": self.planned_margin,
            "actual_margin": self.actual_margin,
            "margin_variance_percent": self.margin_variance_percent,
            "gross_profit": self.gross_profit,
            "estimated_net_profit": self.estimated_net_profit,
        }


@dataclass(frozen=True)
class ProjectBudgetRow:
    project_id: str
    name: str
    actual_budget: float
    spent: float
    remaining: float


__all__ = ["ProjectFinancials", "FinancialSummary", "ProjectBudgetRow"]
