from infra.db.department_invoice.mapper import department_invoice_from_orm, department_invoice_to_orm
from infra.db.department_invoice.repository import SqlAlchemyDepartmentInvoiceRepository

__all__ = [
    "department_invoice_to_orm",
    "department_invoice_from_orm",
    "SqlAlchemyDepartmentInvoiceRepository",
]
