from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from core.domain import DepartmentInvoiceStatus


@dataclass(frozen=True)
class DepartmentInvoiceRow:
    invoice_id: str
    primary_category: str
    secondary_category: str
    supplier_id: str | None
    supplier_name: str
    amount: float
    status: DepartmentInvoiceStatus
    due_date: date | None
    uploaded_at: datetime | None
    file_name: str | None


__all__ = ["DepartmentInvoiceRow"]
