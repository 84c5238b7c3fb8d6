from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.domain import Invoice, InvoiceStatus
from core.interfaces import InvoiceRepository
from infra.db.invoice.mapper import invoice_from_orm, invoice_to_orm
from infra.db.models import InvoiceORM
from infra.db.optimistic import update_with_version_check


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, invoice: Invoice) -> None:
        self.session.add(invoice_to_orm(invoice))

    def update(self, invoice: Invoice) -> None:
        invoice.version = update_with_version_check(
            self.session,
            InvoiceORM,
            invoice.id,
            getattr(invoice, "version", 1),
            {
                "project_id": invoice.project_id,
                "supplier_id": invoice.supplier_id,
                "amount": invoice.amount,
                "status": invoice.status,
                "due_date": invoice.due_date,
                "is_urgent": invoice.is_urgent,
                "comment": invoice.comment,
                "file_name": invoice.file_name,
                "file_url": invoice.file_url,
                "submitter_uid": invoice.submitter_uid,
                "submitter_name": invoice.submitter_name,
                "paid_at": invoice.paid_at,
            },
            entity="invoice",
        )

    def delete(self, invoice_id: str) -> None:
        self.session.execute(delete(InvoiceORM).where(InvoiceORM.id == invoice_id))

    def get(self, invoice_id: str) -> Optional[Invoice]:
        obj = self.session.get(InvoiceORM, invoice_id)
        return invoice_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str, *, include_cancelled: bool = True) -> List[Invoice]:
        stmt = select(InvoiceORM).where(InvoiceORM.project_id == project_id)
        if not include_cancelled:
            stmt = stmt.where(InvoiceORM.status != InvoiceStatus.CANCELLED)
        stmt = stmt.order_by(InvoiceORM.uploaded_at.desc(), InvoiceORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [invoice_from_orm(row) for row in rows]

    def list_non_cancelled_amounts(self, project_id: str) -> List[Optional[float]]:
        stmt = select(InvoiceORM.amount).where(
            InvoiceORM.project_id == project_id,
            InvoiceORM.status != InvoiceStatus.CANCELLED,
        )
        return list(self.session.execute(stmt).scalars().all())


__all__ = ["SqlAlchemyInvoiceRepository"]
