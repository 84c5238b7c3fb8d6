from .aggregation import InvoiceAggregationTrigger, InvoiceWriteDispatcher
from .closing_document import ClosingDocumentService
from .department_invoice import DepartmentInvoiceService
from .finance import FinanceService
from .invoice import InvoiceService
from .project import ProjectService
from .supplier import SupplierService

__all__ = [
    "ProjectService",
    "InvoiceService",
    "SupplierService",
    "DepartmentInvoiceService",
    "ClosingDocumentService",
    "FinanceService",
    "InvoiceAggregationTrigger",
    "InvoiceWriteDispatcher",
]
