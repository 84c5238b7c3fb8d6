from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import DepartmentInvoiceStatus
from core.domain.identifiers import generate_id, utc_now


@dataclass
class DepartmentInvoice:
    """An invoice booked against a department budget line instead of a project."""

    id: str
    primary_category: str
    secondary_category: str
    supplier_id: Optional[str]
    amount: float
    status: DepartmentInvoiceStatus = DepartmentInvoiceStatus.PENDING_PAYMENT
    submitter_uid: Optional[str] = None
    submitter_name: Optional[str] = None
    due_date: Optional[date] = None
    comment: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    version: int = 1

    @staticmethod
    def create(
        primary_category: str,
        secondary_category: str,
        supplier_id: Optional[str],
        amount: float,
        **extra,
    ) -> "DepartmentInvoice":
        extra.setdefault("uploaded_at", utc_now())
        return DepartmentInvoice(
            id=generate_id(),
            primary_category=primary_category,
            secondary_category=secondary_category,
            supplier_id=supplier_id,
            amount=amount,
            **extra,
        )


__all__ = ["DepartmentInvoice"]
