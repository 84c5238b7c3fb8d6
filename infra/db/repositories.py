"""Compatibility wrapper exposing every repository from one module."""

from infra.db.closing_document.repository import SqlAlchemyClosingDocumentRepository
from infra.db.department_invoice.repository import SqlAlchemyDepartmentInvoiceRepository
from infra.db.invoice.repository import SqlAlchemyInvoiceRepository
from infra.db.project.repository import SqlAlchemyProjectRepository
from infra.db.supplier.repository import SqlAlchemySupplierRepository


__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemySupplierRepository",
    "SqlAlchemyDepartmentInvoiceRepository",
    "SqlAlchemyClosingDocumentRepository",
]
