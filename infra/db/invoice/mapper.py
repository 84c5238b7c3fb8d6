from __future__ import annotations

from core.domain import Invoice, InvoiceStatus
from infra.db.models import InvoiceORM


def invoice_to_orm(invoice: Invoice) -> InvoiceORM:
    return InvoiceORM(
        id=invoice.id,
        project_id=invoice.project_id,
        supplier_id=invoice.supplier_id,
        amount=invoice.amount,
        status=invoice.status,
        due_date=invoice.due_date,
        is_urgent=bool(invoice.is_urgent),
        comment=invoice.comment,
        file_name=invoice.file_name,
        file_url=invoice.file_url,
        submitter_uid=invoice.submitter_uid,
        submitter_name=invoice.submitter_name,
        uploaded_at=invoice.uploaded_at,
        paid_at=invoice.paid_at,
        version=getattr(invoice, "version", 1),
    )


def invoice_from_orm(obj: InvoiceORM) -> Invoice:
    return Invoice(
        id=obj.id,
        project_id=obj.project_id,
        supplier_id=obj.supplier_id,
        amount=float(obj.amount or 0.0),
        status=InvoiceStatus(obj.status) if obj.status else InvoiceStatus.PENDING_PAYMENT,
        due_date=obj.due_date,
        is_urgent=bool(obj.is_urgent),
        comment=obj.comment,
        file_name=obj.file_name,
        file_url=obj.file_url,
        submitter_uid=obj.submitter_uid,
        submitter_name=obj.submitter_name,
        uploaded_at=obj.uploaded_at,
        paid_at=obj.paid_at,
        version=getattr(obj, "version", 1),
    )


__all__ = ["invoice_to_orm", "invoice_from_orm"]
