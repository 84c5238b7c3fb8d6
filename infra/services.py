from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy.orm import Session, sessionmaker

from core.events.domain_events import DomainEvents, domain_events
from core.services.aggregation import InvoiceAggregationTrigger, InvoiceWriteDispatcher
from core.services.closing_document import ClosingDocumentService
from core.services.department_invoice import DepartmentInvoiceService
from core.services.finance import FinanceService
from core.services.invoice import InvoiceService
from core.services.project import ProjectService
from core.services.supplier import SupplierService
from infra.config import Settings, load_settings
from infra.db.base import build_engine, build_session_factory
from infra.db.repositories import (
    SqlAlchemyClosingDocumentRepository,
    SqlAlchemyDepartmentInvoiceRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemySupplierRepository,
)
from infra.operational_support import OperationalSupport, get_operational_support


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    events: DomainEvents
    project_service: ProjectService
    supplier_service: SupplierService
    invoice_service: InvoiceService
    department_invoice_service: DepartmentInvoiceService
    closing_document_service: ClosingDocumentService
    finance_service: FinanceService
    aggregation_trigger: InvoiceAggregationTrigger
    dispatcher: InvoiceWriteDispatcher

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "events": self.events,
            "project_service": self.project_service,
            "supplier_service": self.supplier_service,
            "invoice_service": self.invoice_service,
            "department_invoice_service": self.department_invoice_service,
            "closing_document_service": self.closing_document_service,
            "finance_service": self.finance_service,
            "aggregation_trigger": self.aggregation_trigger,
            "dispatcher": self.dispatcher,
        }

    def close(self) -> None:
        self.dispatcher.shutdown(wait=True)
        self.session.close()


def build_service_graph(
    session_factory: Callable[[], Session],
    settings: Settings | None = None,
    *,
    support: OperationalSupport | None = None,
    events: DomainEvents | None = None,
) -> ServiceGraph:
    """Wire repositories, services and the aggregation trigger.

    The returned dispatcher is already started, so every invoice write made
    through ``invoice_service`` recomputes the owning project's total.
    """
    settings = settings or load_settings()
    events = events or domain_events
    session = session_factory()

    project_repo = SqlAlchemyProjectRepository(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    supplier_repo = SqlAlchemySupplierRepository(session)
    department_invoice_repo = SqlAlchemyDepartmentInvoiceRepository(session)
    document_repo = SqlAlchemyClosingDocumentRepository(session)

    project_service = ProjectService(session, project_repo, events=events)
    supplier_service = SupplierService(session, supplier_repo, events=events)
    invoice_service = InvoiceService(
        session,
        invoice_repo,
        project_repo,
        supplier_repo,
        events=events,
    )
    department_invoice_service = DepartmentInvoiceService(
        session,
        department_invoice_repo,
        supplier_repo,
        events=events,
    )
    closing_document_service = ClosingDocumentService(
        session,
        document_repo,
        project_repo,
        invoice_repo,
        department_invoice_repo,
        events=events,
    )
    finance_service = FinanceService(project_repo=project_repo, invoice_repo=invoice_repo)

    aggregation_trigger = InvoiceAggregationTrigger(
        session_factory,
        project_repo_factory=SqlAlchemyProjectRepository,
        invoice_repo_factory=SqlAlchemyInvoiceRepository,
        events=events,
        support=support or get_operational_support(),
    )
    dispatcher = InvoiceWriteDispatcher(
        aggregation_trigger,
        events=events,
        max_workers=settings.trigger_workers,
        synchronous=settings.synchronous_trigger,
    ).start()

    return ServiceGraph(
        session=session,
        events=events,
        project_service=project_service,
        supplier_service=supplier_service,
        invoice_service=invoice_service,
        department_invoice_service=department_invoice_service,
        closing_document_service=closing_document_service,
        finance_service=finance_service,
        aggregation_trigger=aggregation_trigger,
        dispatcher=dispatcher,
    )


def bootstrap(settings: Settings | None = None, *, migrate: bool = True) -> ServiceGraph:
    """Open the configured database, bring its schema to head and build services."""
    settings = settings or load_settings()
    if migrate:
        from infra.migrate import run_migrations

        run_migrations(settings.database_url)
    engine = build_engine(settings.database_url)
    session_factory: sessionmaker = build_session_factory(engine)
    return build_service_graph(session_factory, settings)


__all__ = ["ServiceGraph", "bootstrap", "build_service_graph"]
