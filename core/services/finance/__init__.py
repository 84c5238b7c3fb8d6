from .models import FinancialSummary, ProjectBudgetRow, ProjectFinancials
from .service import FinanceService
from .summary import compute_financial_summary

__all__ = [
    "FinanceService",
    "FinancialSummary",
    "ProjectFinancials",
    "ProjectBudgetRow",
    "compute_financial_summary",
]
