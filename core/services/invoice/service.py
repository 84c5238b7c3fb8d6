from __future__ import annotations

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import InvoiceRepository, ProjectRepository, SupplierRepository
from core.services.invoice.lifecycle import InvoiceLifecycleMixin
from core.services.invoice.query import InvoiceQueryMixin


class InvoiceService(InvoiceLifecycleMixin, InvoiceQueryMixin):
    """Invoice write interface; every committed write emits ``invoice_written``."""

    def __init__(
        self,
        session: Session,
        invoice_repo: InvoiceRepository,
        project_repo: ProjectRepository,
        supplier_repo: SupplierRepository,
        events: DomainEvents | None = None,
    ):
        self._session: Session = session
        self._invoice_repo: InvoiceRepository = invoice_repo
        self._project_repo: ProjectRepository = project_repo
        self._supplier_repo: SupplierRepository = supplier_repo
        self._events: DomainEvents = events or domain_events


__all__ = ["InvoiceService"]
