from core.domain.closing_document import ClosingDocument
from core.domain.department_invoice import DepartmentInvoice
from core.domain.enums import ClosingDocumentType, DepartmentInvoiceStatus, InvoiceStatus, ProjectStatus
from core.domain.identifiers import generate_id, utc_now
from core.domain.invoice import Invoice
from core.domain.project import Project
from core.domain.supplier import Supplier

__all__ = [
    "generate_id",
    "utc_now",
    "ProjectStatus",
    "InvoiceStatus",
    "DepartmentInvoiceStatus",
    "ClosingDocumentType",
    "Project",
    "Invoice",
    "DepartmentInvoice",
    "ClosingDocument",
    "Supplier",
]
