"""Track invoice writes and the project totals they feed."""
from __future__ import annotations

from core.events.signal import Signal
from core.events.models import InvoiceWriteEvent


class DomainEvents:
    def __init__(self) -> None:
        self.invoice_written: Signal[InvoiceWriteEvent] = Signal("invoice_written")
        self.project_changed: Signal[str] = Signal("project_changed")  # project_id
        self.project_totals_changed: Signal[str] = Signal("project_totals_changed")  # project_id
        self.suppliers_changed: Signal[str] = Signal("suppliers_changed")  # supplier_id
        self.department_invoices_changed: Signal[str] = Signal("department_invoices_changed")  # department_invoice_id
        self.closing_documents_changed: Signal[str] = Signal("closing_documents_changed")  # document_id


# SINGLE global instance
domain_events = DomainEvents()
