from infra.db.invoice.mapper import invoice_from_orm, invoice_to_orm
from infra.db.invoice.repository import SqlAlchemyInvoiceRepository

__all__ = [
    "invoice_to_orm",
    "invoice_from_orm",
    "SqlAlchemyInvoiceRepository",
]
