from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import InvoiceStatus
from core.domain.identifiers import generate_id, utc_now


@dataclass
class Invoice:
    id: str
    project_id: Optional[str]
    supplier_id: Optional[str]
    amount: float
    status: InvoiceStatus = InvoiceStatus.PENDING_PAYMENT
    due_date: Optional[date] = None
    is_urgent: bool = False
    comment: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    submitter_uid: Optional[str] = None
    submitter_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    version: int = 1

    @property
    def is_cancelled(self) -> bool:
        return self.status == InvoiceStatus.CANCELLED

    @staticmethod
    def create(
        project_id: Optional[str],
        supplier_id: Optional[str],
        amount: float,
        status: InvoiceStatus = InvoiceStatus.PENDING_PAYMENT,
        **extra,
    ) -> "Invoice":
        extra.setdefault("uploaded_at", utc_now())
        return Invoice(
            id=generate_id(),
            project_id=project_id,
            supplier_id=supplier_id,
            amount=amount,
            status=status,
            **extra,
        )


__all__ = ["Invoice"]
