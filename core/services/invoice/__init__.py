from .models import InvoiceRow
from .service import InvoiceService

__all__ = ["InvoiceService", "InvoiceRow"]
