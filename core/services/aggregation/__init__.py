from .dispatcher import InvoiceWriteDispatcher
from .models import RecomputationOutcome, RecomputationStatus, sum_invoice_amounts
from .trigger import InvoiceAggregationTrigger

__all__ = [
    "InvoiceAggregationTrigger",
    "InvoiceWriteDispatcher",
    "RecomputationOutcome",
    "RecomputationStatus",
    "sum_invoice_amounts",
]
