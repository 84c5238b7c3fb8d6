from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ProjectStatus
from core.domain.identifiers import generate_id


@dataclass
class Project:
    id: str
    name: str
    number: Optional[str] = None
    customer: Optional[str] = None
    description: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    due_date: Optional[date] = None
    manager_id: Optional[str] = None
    planned_budget: Optional[float] = None
    actual_budget: Optional[float] = None
    planned_revenue: Optional[float] = None
    actual_revenue: Optional[float] = None
    usn_tax: Optional[float] = None
    nds_tax: Optional[float] = None
    # Owned by the invoice aggregation trigger.
    total_non_cancelled_invoice_amount: float = 0.0
    version: int = 1

    @staticmethod
    def create(name: str, description: str = "", **extra) -> "Project":
        return Project(
            id=generate_id(),
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Project"]
