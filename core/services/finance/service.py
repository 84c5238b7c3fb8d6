from __future__ import annotations

from core.exceptions import NotFoundError
from core.interfaces import InvoiceRepository, ProjectRepository
from core.services.finance.models import FinancialSummary, ProjectBudgetRow, ProjectFinancials
from core.services.finance.summary import compute_financial_summary


class FinanceService:
    """Derived project metrics, always computed from live invoice data."""

    def __init__(
        self,
        *,
        project_repo: ProjectRepository,
        invoice_repo: InvoiceRepository,
    ) -> None:
        self._project_repo: ProjectRepository = project_repo
        self._invoice_repo: InvoiceRepository = invoice_repo

    def get_financial_summary(self, project_id: str) -> FinancialSummary:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        amounts = self._invoice_repo.list_non_cancelled_amounts(project_id)
        return compute_financial_summary(ProjectFinancials.from_project(project), amounts)

    def list_budget_overview(self) -> list[ProjectBudgetRow]:
        # Reads the stored aggregate; may lag behind in-flight invoice writes.
        rows: list[ProjectBudgetRow] = []
        for project in self._project_repo.list_all():
            actual_budget = float(project.actual_budget or 0.0)
            spent = float(project.total_non_cancelled_invoice_amount or 0.0)
            rows.append(
                ProjectBudgetRow(
                    project_id=project.id,
                    name=project.name,
                    actual_budget=actual_budget,
                    spent=spent,
                    remaining=actual_budget - spent,
                )
            )
        return rows


__all__ = ["FinanceService"]
