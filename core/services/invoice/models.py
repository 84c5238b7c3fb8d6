from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from core.domain import InvoiceStatus

UNKNOWN_SUPPLIER_LABEL = "Unknown supplier"
NO_SUPPLIER_LABEL = "Not specified"


@dataclass(frozen=True)
class InvoiceRow:
    invoice_id: str
    project_id: str | None
    supplier_id: str | None
    supplier_name: str
    amount: float
    status: InvoiceStatus
    due_date: date | None
    is_urgent: bool
    uploaded_at: datetime | None


__all__ = ["InvoiceRow", "UNKNOWN_SUPPLIER_LABEL", "NO_SUPPLIER_LABEL"]
