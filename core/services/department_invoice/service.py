from __future__ import annotations

import logging
from datetime import date
from typing import Any, List

from sqlalchemy.orm import Session

from core.domain import DepartmentInvoice, DepartmentInvoiceStatus, Supplier
from core.events.domain_events import DomainEvents, domain_events
from core.exceptions import ConcurrencyError, NotFoundError, ValidationError
from core.interfaces import DepartmentInvoiceRepository, SupplierRepository
from core.services.common.batch_resolver import ReferenceBatchResolver
from core.services.common.reference_cache import ReferenceCache
from core.services.department_invoice.models import DepartmentInvoiceRow
from core.services.invoice.models import NO_SUPPLIER_LABEL, UNKNOWN_SUPPLIER_LABEL
from core.services.invoice.validation import parse_amount

logger = logging.getLogger(__name__)


def coerce_department_status(value: Any) -> DepartmentInvoiceStatus:
    if isinstance(value, DepartmentInvoiceStatus):
        return value
    try:
        return DepartmentInvoiceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown department invoice status: {value!r}.",
            code="DEPARTMENT_INVOICE_STATUS_INVALID",
        ) from None


class DepartmentInvoiceService:
    """
    Invoices charged to a department budget line rather than a project.

    They never feed a project's invoice total, so writes only announce
    ``department_invoices_changed``.
    """

    def __init__(
        self,
        session: Session,
        department_invoice_repo: DepartmentInvoiceRepository,
        supplier_repo: SupplierRepository,
        events: DomainEvents | None = None,
    ):
        self._session: Session = session
        self._department_invoice_repo: DepartmentInvoiceRepository = department_invoice_repo
        self._supplier_repo: SupplierRepository = supplier_repo
        self._events: DomainEvents = events or domain_events

    def create_department_invoice(
        self,
        primary_category: str,
        secondary_category: str,
        supplier_id: str,
        amount: Any,
        submitter_uid: str,
        submitter_name: str | None = None,
        status: DepartmentInvoiceStatus | str = DepartmentInvoiceStatus.PENDING_PAYMENT,
        due_date: date | None = None,
        comment: str | None = None,
        file_name: str | None = None,
        file_url: str | None = None,
    ) -> DepartmentInvoice:
        primary = self._require_text(primary_category, "Primary category", "DEPARTMENT_INVOICE_CATEGORY_REQUIRED")
        secondary = self._require_text(
            secondary_category, "Secondary category", "DEPARTMENT_INVOICE_CATEGORY_REQUIRED"
        )
        supplier_id = self._require_text(supplier_id, "Supplier", "DEPARTMENT_INVOICE_SUPPLIER_REQUIRED")
        submitter_uid = self._require_text(submitter_uid, "Submitter", "DEPARTMENT_INVOICE_SUBMITTER_REQUIRED")
        parsed_amount = parse_amount(amount)
        resolved_status = coerce_department_status(status)
        if self._supplier_repo.get(supplier_id) is None:
            raise NotFoundError("Supplier not found.", code="SUPPLIER_NOT_FOUND")

        invoice = DepartmentInvoice.create(
            primary_category=primary,
            secondary_category=secondary,
            supplier_id=supplier_id,
            amount=parsed_amount,
            status=resolved_status,
            submitter_uid=submitter_uid,
            submitter_name=(submitter_name or "").strip() or None,
            due_date=due_date,
            comment=(comment or "").strip() or None,
            file_name=(file_name or "").strip() or None,
            file_url=(file_url or "").strip() or None,
        )

        try:
            self._department_invoice_repo.add(invoice)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating department invoice: %s", e)
            raise

        logger.info(
            "Created department invoice %s (%s / %s, %.2f)",
            invoice.id,
            primary,
            secondary,
            invoice.amount,
        )
        self._events.department_invoices_changed.emit(invoice.id)
        return invoice

    def set_status(
        self,
        invoice_id: str,
        status: DepartmentInvoiceStatus | str,
        *,
        expected_version: int | None = None,
    ) -> DepartmentInvoice:
        invoice = self.get_department_invoice(invoice_id)
        if expected_version is not None and invoice.version != expected_version:
            raise ConcurrencyError(
                "Department invoice changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )
        invoice.status = coerce_department_status(status)
        try:
            self._department_invoice_repo.update(invoice)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error updating department invoice %s: %s", invoice_id, e)
            raise

        self._events.department_invoices_changed.emit(invoice.id)
        return invoice

    def delete_department_invoice(self, invoice_id: str) -> None:
        self.get_department_invoice(invoice_id)
        try:
            self._department_invoice_repo.delete(invoice_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting department invoice %s: %s", invoice_id, e)
            raise

        logger.info("Deleted department invoice %s", invoice_id)
        self._events.department_invoices_changed.emit(invoice_id)

    def get_department_invoice(self, invoice_id: str) -> DepartmentInvoice:
        invoice = self._department_invoice_repo.get(invoice_id)
        if invoice is None:
            raise NotFoundError("Department invoice not found.", code="DEPARTMENT_INVOICE_NOT_FOUND")
        return invoice

    def list_by_submitter(self, submitter_uid: str) -> List[DepartmentInvoice]:
        uid = (submitter_uid or "").strip()
        if not uid:
            return []
        return self._department_invoice_repo.list_by_submitter(uid)

    def list_submitter_invoice_rows(
        self,
        submitter_uid: str,
        *,
        supplier_cache: ReferenceCache[Supplier] | None = None,
    ) -> List[DepartmentInvoiceRow]:
        invoices = self.list_by_submitter(submitter_uid)
        cache = supplier_cache if supplier_cache is not None else self._new_supplier_cache()
        result = cache.ensure(inv.supplier_id for inv in invoices)
        if not result.complete:
            logger.warning(
                "Supplier names unavailable for %d id(s) of submitter %s",
                len(result.failed_ids),
                submitter_uid,
            )

        return [
            DepartmentInvoiceRow(
                invoice_id=inv.id,
                primary_category=inv.primary_category,
                secondary_category=inv.secondary_category,
                supplier_id=inv.supplier_id,
                supplier_name=(
                    cache.name_for(inv.supplier_id, UNKNOWN_SUPPLIER_LABEL) if inv.supplier_id else NO_SUPPLIER_LABEL
                ),
                amount=float(inv.amount or 0.0),
                status=inv.status,
                due_date=inv.due_date,
                uploaded_at=inv.uploaded_at,
                file_name=inv.file_name,
            )
            for inv in invoices
        ]

    @staticmethod
    def _require_text(value: str | None, label: str, code: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValidationError(f"{label} is required.", code=code)
        return cleaned

    def _new_supplier_cache(self) -> ReferenceCache[Supplier]:
        return ReferenceCache(ReferenceBatchResolver(self._supplier_repo.list_by_ids, name="supplier"))


__all__ = ["DepartmentInvoiceService", "coerce_department_status"]
