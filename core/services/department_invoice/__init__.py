from .models import DepartmentInvoiceRow
from .service import DepartmentInvoiceService

__all__ = ["DepartmentInvoiceService", "DepartmentInvoiceRow"]
