from __future__ import annotations

from core.domain import DepartmentInvoice, DepartmentInvoiceStatus
from infra.db.models import DepartmentInvoiceORM


def department_invoice_to_orm(invoice: DepartmentInvoice) -> DepartmentInvoiceORM:
    return DepartmentInvoiceORM(
        id=invoice.id,
        primary_category=invoice.primary_category,
        secondary_category=invoice.secondary_category,
        supplier_id=invoice.supplier_id,
        amount=invoice.amount,
        status=invoice.status,
        submitter_uid=invoice.submitter_uid,
        submitter_name=invoice.submitter_name,
        due_date=invoice.due_date,
        comment=invoice.comment,
        file_name=invoice.file_name,
        file_url=invoice.file_url,
        uploaded_at=invoice.uploaded_at,
        version=getattr(invoice, "version", 1),
    )


def department_invoice_from_orm(obj: DepartmentInvoiceORM) -> DepartmentInvoice:
    return DepartmentInvoice(
        id=obj.id,
        primary_category=obj.primary_category,
        secondary_category=obj.secondary_category,
        supplier_id=obj.supplier_id,
        amount=float(obj.amount or 0.0),
        status=(
            DepartmentInvoiceStatus(obj.status) if obj.status else DepartmentInvoiceStatus.PENDING_PAYMENT
        ),
        submitter_uid=obj.submitter_uid,
        submitter_name=obj.submitter_name,
        due_date=obj.due_date,
        comment=obj.comment,
        file_name=obj.file_name,
        file_url=obj.file_url,
        uploaded_at=obj.uploaded_at,
        version=getattr(obj, "version", 1),
    )


__all__ = ["department_invoice_to_orm", "department_invoice_from_orm"]
