from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.domain import ClosingDocument
from core.interfaces import ClosingDocumentRepository
from infra.db.closing_document.mapper import closing_document_from_orm, closing_document_to_orm
from infra.db.models import ClosingDocumentORM


class SqlAlchemyClosingDocumentRepository(ClosingDocumentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, document: ClosingDocument) -> None:
        self.session.add(closing_document_to_orm(document))

    def delete(self, document_id: str) -> None:
        self.session.execute(delete(ClosingDocumentORM).where(ClosingDocumentORM.id == document_id))

    def get(self, document_id: str) -> Optional[ClosingDocument]:
        obj = self.session.get(ClosingDocumentORM, document_id)
        return closing_document_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[ClosingDocument]:
        stmt = (
            select(ClosingDocumentORM)
            .where(ClosingDocumentORM.project_id == project_id)
            .order_by(ClosingDocumentORM.uploaded_at.desc(), ClosingDocumentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [closing_document_from_orm(row) for row in rows]

    def list_by_department_invoice(self, department_invoice_id: str) -> List[ClosingDocument]:
        stmt = (
            select(ClosingDocumentORM)
            .where(ClosingDocumentORM.department_invoice_id == department_invoice_id)
            .order_by(ClosingDocumentORM.uploaded_at.desc(), ClosingDocumentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [closing_document_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyClosingDocumentRepository"]
