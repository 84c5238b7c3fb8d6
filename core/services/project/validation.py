from __future__ import annotations

import math
from typing import Any

from core.exceptions import ValidationError
from core.interfaces import ProjectRepository

FINANCIAL_FIELDS = (
    "planned_budget",
    "actual_budget",
    "planned_revenue",
    "actual_revenue",
    "usn_tax",
    "nds_tax",
)


class ProjectValidationMixin:
    _project_repo: ProjectRepository

    def _validate_project_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")

    def _validate_financial_value(self, field_name: str, value: Any) -> float | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{field_name} must be a number.", code="PROJECT_FINANCIAL_INVALID")
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            raise ValidationError(f"{field_name} must be a number.", code="PROJECT_FINANCIAL_INVALID")
        if number < 0:
            raise ValidationError(f"{field_name} cannot be negative.", code="PROJECT_FINANCIAL_NEGATIVE")
        return number


__all__ = ["ProjectValidationMixin", "FINANCIAL_FIELDS"]
