from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents, domain_events
from core.events.models import InvoiceWriteEvent
from core.events.tracing import bind_trace_id, current_trace_id
from core.exceptions import MissingAssociationError, RecomputationFailure
from core.interfaces import InvoiceRepository, ProjectRepository
from core.services.aggregation.models import (
    RecomputationOutcome,
    RecomputationStatus,
    sum_invoice_amounts,
)

logger = logging.getLogger(__name__)


class SupportEventSink(Protocol):
    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str: ...


class InvoiceAggregationTrigger:
    """Keeps ``Project.total_non_cancelled_invoice_amount`` in line with its invoices.

    Every invocation re-derives the total from a full query of the project's
    non-cancelled invoices and overwrites the stored field, so duplicate or
    out-of-order write notifications cannot double count. Failures are logged
    and dropped: the next invoice write on the project recomputes from
    scratch. The trigger keeps no state between invocations and opens its own
    session for each one.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        project_repo_factory: Callable[[Session], ProjectRepository],
        invoice_repo_factory: Callable[[Session], InvoiceRepository],
        events: DomainEvents | None = None,
        support: SupportEventSink | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._project_repo_factory = project_repo_factory
        self._invoice_repo_factory = invoice_repo_factory
        self._events: DomainEvents = events or domain_events
        self._support = support

    def handle(self, event: InvoiceWriteEvent) -> list[RecomputationOutcome]:
        with bind_trace_id(event.event_id):
            try:
                project_ids = self._resolve_project_ids(event)
            except MissingAssociationError as exc:
                logger.info("%s Skipping update.", exc)
                return [
                    RecomputationOutcome(
                        status=RecomputationStatus.SKIPPED,
                        project_id=None,
                        invoice_id=event.invoice_id,
                        error=str(exc),
                    )
                ]

            logger.info(
                "Detected %s of invoice %s for project(s) %s. Recalculating total.",
                event.kind.value,
                event.invoice_id,
                ", ".join(project_ids),
            )
            return [self._recompute(project_id, invoice_id=event.invoice_id) for project_id in project_ids]

    def recompute_project(self, project_id: str) -> RecomputationOutcome:
        with bind_trace_id(current_trace_id()):
            return self._recompute(project_id)

    def recompute_all_projects(self) -> list[RecomputationOutcome]:
        with self._session_factory() as session:
            project_ids = self._project_repo_factory(session).list_ids()
        logger.info("Recomputing invoice totals for %d project(s)", len(project_ids))
        return [self.recompute_project(project_id) for project_id in project_ids]

    @staticmethod
    def _resolve_project_ids(event: InvoiceWriteEvent) -> list[str]:
        # The owning project comes first; a previous owner is recomputed too
        # when the invoice moved between projects.
        project_ids = event.affected_project_ids
        if not project_ids:
            raise MissingAssociationError(
                f"Invoice {event.invoice_id} has no project_id.",
                code="INVOICE_WITHOUT_PROJECT",
            )
        return project_ids

    def _recompute(self, project_id: str, *, invoice_id: str | None = None) -> RecomputationOutcome:
        try:
            total = self._write_total(project_id)
        except RecomputationFailure as failure:
            logger.error("%s", failure, exc_info=failure.__cause__)
            self._report_failure(failure, invoice_id=invoice_id)
            return RecomputationOutcome(
                status=RecomputationStatus.FAILED,
                project_id=project_id,
                invoice_id=invoice_id,
                error=str(failure),
            )

        logger.info("Updated total_non_cancelled_invoice_amount for project %s to %s", project_id, total)
        try:
            self._events.project_totals_changed.emit(project_id)
        except Exception:
            # The total is already committed; a listener must not undo the outcome.
            logger.exception("project_totals_changed listener failed for project %s", project_id)
        return RecomputationOutcome(
            status=RecomputationStatus.UPDATED,
            project_id=project_id,
            invoice_id=invoice_id,
            total=total,
        )

    def _write_total(self, project_id: str) -> float:
        with self._session_factory() as session:
            try:
                amounts = self._invoice_repo_factory(session).list_non_cancelled_amounts(project_id)
                total = sum_invoice_amounts(amounts)
                logger.debug("Recalculated total for project %s: %s (%d invoices)", project_id, total, len(amounts))
                self._project_repo_factory(session).set_invoice_total(project_id, total)
                session.commit()
            except Exception as exc:
                session.rollback()
                raise RecomputationFailure(
                    f"Error updating total for project {project_id}: {exc}",
                    project_id=project_id,
                    code="RECOMPUTE_FAILED",
                ) from exc
        return total

    def _report_failure(self, failure: RecomputationFailure, *, invoice_id: str | None) -> None:
        if self._support is None:
            return
        try:
            self._support.emit_event(
                event_type="aggregation.recompute_failed",
                level="ERROR",
                message=str(failure),
                data={
                    "project_id": failure.project_id,
                    "invoice_id": invoice_id,
                    "code": failure.code,
                },
            )
        except Exception:
            logger.exception("Failed to record recompute failure for project %s", failure.project_id)


__all__ = ["InvoiceAggregationTrigger", "SupportEventSink"]
