from __future__ import annotations

from core.domain import ClosingDocument, ClosingDocumentType
from infra.db.models import ClosingDocumentORM


def closing_document_to_orm(document: ClosingDocument) -> ClosingDocumentORM:
    return ClosingDocumentORM(
        id=document.id,
        project_id=document.project_id,
        invoice_id=document.invoice_id,
        department_invoice_id=document.department_invoice_id,
        file_name=document.file_name,
        file_url=document.file_url,
        doc_type=document.doc_type,
        doc_date=document.doc_date,
        comment=document.comment,
        uploaded_at=document.uploaded_at,
    )


def closing_document_from_orm(obj: ClosingDocumentORM) -> ClosingDocument:
    return ClosingDocument(
        id=obj.id,
        file_name=obj.file_name,
        file_url=obj.file_url,
        project_id=obj.project_id,
        invoice_id=obj.invoice_id,
        department_invoice_id=obj.department_invoice_id,
        doc_type=ClosingDocumentType(obj.doc_type) if obj.doc_type else None,
        doc_date=obj.doc_date,
        comment=obj.comment,
        uploaded_at=obj.uploaded_at,
    )


__all__ = ["closing_document_to_orm", "closing_document_from_orm"]
