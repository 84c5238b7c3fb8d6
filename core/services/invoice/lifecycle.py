from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from core.domain import Invoice, InvoiceStatus, utc_now
from core.events.domain_events import DomainEvents
from core.events.models import InvoiceWriteEvent
from core.exceptions import ConcurrencyError, NotFoundError
from core.interfaces import InvoiceRepository
from core.services.invoice.validation import InvoiceValidationMixin, coerce_status, parse_amount

logger = logging.getLogger(__name__)


class InvoiceLifecycleMixin(InvoiceValidationMixin):
    _session: Session
    _invoice_repo: InvoiceRepository
    _events: DomainEvents

    def create_invoice(
        self,
        project_id: str,
        supplier_id: str,
        amount: Any,
        status: InvoiceStatus | str = InvoiceStatus.PENDING_PAYMENT,
        due_date: date | None = None,
        is_urgent: bool = False,
        comment: str | None = None,
        file_name: str | None = None,
        file_url: str | None = None,
        submitter_uid: str | None = None,
        submitter_name: str | None = None,
    ) -> Invoice:
        project_id = self._require_reference(project_id, label="Project", code="INVOICE_PROJECT_REQUIRED")
        supplier_id = self._require_reference(supplier_id, label="Supplier", code="INVOICE_SUPPLIER_REQUIRED")
        parsed_amount = parse_amount(amount)
        resolved_status = coerce_status(status)
        self._validate_project(project_id)
        self._validate_supplier(supplier_id)

        invoice = Invoice.create(
            project_id=project_id,
            supplier_id=supplier_id,
            amount=parsed_amount,
            status=resolved_status,
            due_date=due_date,
            is_urgent=bool(is_urgent),
            comment=(comment or "").strip() or None,
            file_name=(file_name or "").strip() or None,
            file_url=(file_url or "").strip() or None,
            submitter_uid=submitter_uid,
            submitter_name=submitter_name,
            paid_at=utc_now() if resolved_status == InvoiceStatus.PAID else None,
        )

        try:
            self._invoice_repo.add(invoice)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating invoice: %s", e)
            raise

        logger.info("Created invoice %s for project %s (%.2f)", invoice.id, project_id, invoice.amount)
        self._events.invoice_written.emit(InvoiceWriteEvent.of(invoice.id, after=invoice))
        return invoice

    def update_invoice(
        self,
        invoice_id: str,
        project_id: str | None = None,
        supplier_id: str | None = None,
        amount: Any = None,
        status: InvoiceStatus | str | None = None,
        due_date: date | None = None,
        is_urgent: bool | None = None,
        comment: str | None = None,
        file_name: str | None = None,
        file_url: str | None = None,
        expected_version: int | None = None,
    ) -> Invoice:
        current = self._invoice_repo.get(invoice_id)
        if current is None:
            raise NotFoundError("Invoice not found.", code="INVOICE_NOT_FOUND")
        if expected_version is not None and current.version != expected_version:
            raise ConcurrencyError(
                "Invoice changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        before = replace(current)
        invoice = current

        if project_id is not None:
            project_id = self._require_reference(project_id, label="Project", code="INVOICE_PROJECT_REQUIRED")
            if project_id != invoice.project_id:
                self._validate_project(project_id)
            invoice.project_id = project_id

        if supplier_id is not None:
            supplier_id = self._require_reference(supplier_id, label="Supplier", code="INVOICE_SUPPLIER_REQUIRED")
            if supplier_id != invoice.supplier_id:
                self._validate_supplier(supplier_id)
            invoice.supplier_id = supplier_id

        if amount is not None:
            invoice.amount = parse_amount(amount)

        if status is not None:
            self._apply_status(invoice, coerce_status(status))

        if due_date is not None:
            invoice.due_date = due_date

        if is_urgent is not None:
            invoice.is_urgent = bool(is_urgent)

        if comment is not None:
            invoice.comment = comment.strip() or None

        if file_name is not None:
            invoice.file_name = file_name.strip() or None

        if file_url is not None:
            invoice.file_url = file_url.strip() or None

        try:
            self._invoice_repo.update(invoice)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error updating invoice %s: %s", invoice_id, e)
            raise

        self._events.invoice_written.emit(InvoiceWriteEvent.of(invoice.id, before=before, after=invoice))
        return invoice

    def set_status(self, invoice_id: str, status: InvoiceStatus | str) -> Invoice:
        return self.update_invoice(invoice_id, status=status)

    def cancel_invoice(self, invoice_id: str) -> Invoice:
        return self.set_status(invoice_id, InvoiceStatus.CANCELLED)

    def delete_invoice(self, invoice_id: str) -> None:
        invoice = self._invoice_repo.get(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice not found.", code="INVOICE_NOT_FOUND")
        try:
            self._invoice_repo.delete(invoice_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting invoice %s: %s", invoice_id, e)
            raise

        logger.info("Deleted invoice %s of project %s", invoice_id, invoice.project_id)
        self._events.invoice_written.emit(InvoiceWriteEvent.of(invoice_id, before=invoice))

    @staticmethod
    def _apply_status(invoice: Invoice, status: InvoiceStatus) -> None:
        if status == InvoiceStatus.PAID and invoice.status != InvoiceStatus.PAID:
            invoice.paid_at = utc_now()
        elif status != InvoiceStatus.PAID:
            invoice.paid_at = None
        invoice.status = status


__all__ = ["InvoiceLifecycleMixin"]
