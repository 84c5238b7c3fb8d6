from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, List

from sqlalchemy.orm import Session

from core.domain import ClosingDocument, ClosingDocumentType
from core.events.domain_events import DomainEvents, domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import (
    ClosingDocumentRepository,
    DepartmentInvoiceRepository,
    InvoiceRepository,
    ProjectRepository,
)
from core.services.closing_document.models import ProjectClosingDocuments

logger = logging.getLogger(__name__)


def coerce_document_type(value: Any) -> ClosingDocumentType | None:
    if value is None or isinstance(value, ClosingDocumentType):
        return value
    text = str(value).strip().lower()
    if not text:
        return None
    try:
        return ClosingDocumentType(text)
    except ValueError:
        raise ValidationError(f"Unknown document type: {value!r}.", code="CLOSING_DOC_TYPE_INVALID") from None


def _unique_ids(ids: Iterable[str | None]) -> list[str]:
    seen: list[str] = []
    for raw in ids:
        cleaned = (raw or "").strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class ClosingDocumentService:
    """
    Files closing paperwork against project invoices and department invoices.

    One uploaded file attached to several invoices becomes one record per
    invoice, all written in a single commit.
    """

    def __init__(
        self,
        session: Session,
        document_repo: ClosingDocumentRepository,
        project_repo: ProjectRepository,
        invoice_repo: InvoiceRepository,
        department_invoice_repo: DepartmentInvoiceRepository,
        events: DomainEvents | None = None,
    ):
        self._session: Session = session
        self._document_repo: ClosingDocumentRepository = document_repo
        self._project_repo: ProjectRepository = project_repo
        self._invoice_repo: InvoiceRepository = invoice_repo
        self._department_invoice_repo: DepartmentInvoiceRepository = department_invoice_repo
        self._events: DomainEvents = events or domain_events

    def attach_to_invoices(
        self,
        project_id: str,
        invoice_ids: Iterable[str],
        file_name: str,
        file_url: str,
        *,
        doc_type: ClosingDocumentType | str | None = None,
        doc_date: date | None = None,
        comment: str | None = None,
    ) -> List[ClosingDocument]:
        if self._project_repo.get(project_id) is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        ids = _unique_ids(invoice_ids)
        if not ids:
            raise ValidationError(
                "Select at least one invoice for the document.",
                code="CLOSING_DOC_INVOICE_REQUIRED",
            )
        for invoice_id in ids:
            invoice = self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise NotFoundError("Invoice not found.", code="INVOICE_NOT_FOUND")
            if invoice.project_id != project_id:
                raise ValidationError(
                    f"Invoice {invoice_id} belongs to another project.",
                    code="CLOSING_DOC_INVOICE_PROJECT_MISMATCH",
                )

        fields = self._document_fields(file_name, file_url, doc_type, doc_date, comment)
        documents = [ClosingDocument.create(project_id=project_id, invoice_id=inv_id, **fields) for inv_id in ids]
        self._add_all(documents, owner=f"project {project_id}")
        return documents

    def attach_general_document(
        self,
        project_id: str,
        file_name: str,
        file_url: str,
        *,
        doc_type: ClosingDocumentType | str | None = None,
        doc_date: date | None = None,
        comment: str | None = None,
    ) -> ClosingDocument:
        if self._project_repo.get(project_id) is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        fields = self._document_fields(file_name, file_url, doc_type, doc_date, comment)
        document = ClosingDocument.create(project_id=project_id, **fields)
        self._add_all([document], owner=f"project {project_id}")
        return document

    def attach_to_department_invoices(
        self,
        department_invoice_ids: Iterable[str],
        file_name: str,
        file_url: str,
        *,
        doc_type: ClosingDocumentType | str | None = None,
        doc_date: date | None = None,
        comment: str | None = None,
    ) -> List[ClosingDocument]:
        ids = _unique_ids(department_invoice_ids)
        if not ids:
            raise ValidationError(
                "Select at least one invoice for the document.",
                code="CLOSING_DOC_INVOICE_REQUIRED",
            )
        for invoice_id in ids:
            if self._department_invoice_repo.get(invoice_id) is None:
                raise NotFoundError("Department invoice not found.", code="DEPARTMENT_INVOICE_NOT_FOUND")

        fields = self._document_fields(file_name, file_url, doc_type, doc_date, comment)
        documents = [ClosingDocument.create(department_invoice_id=inv_id, **fields) for inv_id in ids]
        self._add_all(documents, owner="department invoices")
        return documents

    def list_project_documents(self, project_id: str) -> ProjectClosingDocuments:
        grouped = ProjectClosingDocuments(project_id=project_id)
        for document in self._document_repo.list_by_project(project_id):
            if document.invoice_id:
                grouped.by_invoice.setdefault(document.invoice_id, []).append(document)
            else:
                grouped.general.append(document)
        return grouped

    def list_department_invoice_documents(self, department_invoice_id: str) -> List[ClosingDocument]:
        return self._document_repo.list_by_department_invoice(department_invoice_id)

    def delete_document(self, document_id: str) -> None:
        if self._document_repo.get(document_id) is None:
            raise NotFoundError("Closing document not found.", code="CLOSING_DOC_NOT_FOUND")
        try:
            self._document_repo.delete(document_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting closing document %s: %s", document_id, e)
            raise

        logger.info("Deleted closing document %s", document_id)
        self._events.closing_documents_changed.emit(document_id)

    @staticmethod
    def _document_fields(
        file_name: str,
        file_url: str,
        doc_type: ClosingDocumentType | str | None,
        doc_date: date | None,
        comment: str | None,
    ) -> dict[str, Any]:
        cleaned_name = (file_name or "").strip()
        cleaned_url = (file_url or "").strip()
        if not cleaned_name or not cleaned_url:
            raise ValidationError("No file selected for upload.", code="CLOSING_DOC_FILE_REQUIRED")
        return {
            "file_name": cleaned_name,
            "file_url": cleaned_url,
            "doc_type": coerce_document_type(doc_type),
            "doc_date": doc_date,
            "comment": (comment or "").strip() or None,
        }

    def _add_all(self, documents: List[ClosingDocument], *, owner: str) -> None:
        try:
            for document in documents:
                self._document_repo.add(document)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error saving closing documents for %s: %s", owner, e)
            raise

        logger.info("Saved %d closing document(s) for %s", len(documents), owner)
        for document in documents:
            self._events.closing_documents_changed.emit(document.id)


__all__ = ["ClosingDocumentService", "coerce_document_type"]
