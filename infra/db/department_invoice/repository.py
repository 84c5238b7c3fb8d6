from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.domain import DepartmentInvoice
from core.interfaces import DepartmentInvoiceRepository
from infra.db.department_invoice.mapper import department_invoice_from_orm, department_invoice_to_orm
from infra.db.models import DepartmentInvoiceORM
from infra.db.optimistic import update_with_version_check


class SqlAlchemyDepartmentInvoiceRepository(DepartmentInvoiceRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, invoice: DepartmentInvoice) -> None:
        self.session.add(department_invoice_to_orm(invoice))

    def update(self, invoice: DepartmentInvoice) -> None:
        invoice.version = update_with_version_check(
            self.session,
            DepartmentInvoiceORM,
            invoice.id,
            getattr(invoice, "version", 1),
            {
                "primary_category": invoice.primary_category,
                "secondary_category": invoice.secondary_category,
                "supplier_id": invoice.supplier_id,
                "amount": invoice.amount,
                "status": invoice.status,
                "due_date": invoice.due_date,
                "comment": invoice.comment,
                "file_name": invoice.file_name,
                "file_url": invoice.file_url,
            },
            entity="department invoice",
        )

    def delete(self, invoice_id: str) -> None:
        self.session.execute(delete(DepartmentInvoiceORM).where(DepartmentInvoiceORM.id == invoice_id))

    def get(self, invoice_id: str) -> Optional[DepartmentInvoice]:
        obj = self.session.get(DepartmentInvoiceORM, invoice_id)
        return department_invoice_from_orm(obj) if obj else None

    def list_by_submitter(self, submitter_uid: str) -> List[DepartmentInvoice]:
        stmt = (
            select(DepartmentInvoiceORM)
            .where(DepartmentInvoiceORM.submitter_uid == submitter_uid)
            .order_by(DepartmentInvoiceORM.uploaded_at.desc(), DepartmentInvoiceORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [department_invoice_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyDepartmentInvoiceRepository"]
