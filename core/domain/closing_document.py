from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import ClosingDocumentType
from core.domain.identifiers import generate_id, utc_now


@dataclass
class ClosingDocument:
    """
    Paperwork (contract, act, transfer document) that closes out an invoice.

    A project document carries ``project_id`` and usually ``invoice_id``; one
    without an invoice is filed as a general document of the project. A
    department document carries ``department_invoice_id`` only.
    """

    id: str
    file_name: str
    file_url: str
    project_id: Optional[str] = None
    invoice_id: Optional[str] = None
    department_invoice_id: Optional[str] = None
    doc_type: Optional[ClosingDocumentType] = None
    doc_date: Optional[date] = None
    comment: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    @staticmethod
    def create(file_name: str, file_url: str, **extra) -> "ClosingDocument":
        extra.setdefault("uploaded_at", utc_now())
        return ClosingDocument(id=generate_id(), file_name=file_name, file_url=file_url, **extra)


__all__ = ["ClosingDocument"]
