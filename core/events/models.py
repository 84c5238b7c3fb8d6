from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.identifiers import generate_id, utc_now
from core.domain.invoice import Invoice


class InvoiceWriteKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class InvoiceWriteEvent:
    """One committed write of an invoice document.

    ``before`` is absent for creates, ``after`` is absent for deletes. Both are
    copies, so later mutation of the caller's objects does not leak into
    queued events.
    """

    invoice_id: str
    before: Optional[Invoice] = None
    after: Optional[Invoice] = None
    event_id: str = field(default_factory=generate_id)
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def kind(self) -> InvoiceWriteKind:
        if self.before is None:
            return InvoiceWriteKind.CREATED
        if self.after is None:
            return InvoiceWriteKind.DELETED
        return InvoiceWriteKind.UPDATED

    @property
    def affected_project_ids(self) -> list[str]:
        """Owning project first, then the previous owner when the invoice moved."""
        ids: list[str] = []
        for invoice in (self.after, self.before):
            pid = None if invoice is None else invoice.project_id
            if pid and pid not in ids:
                ids.append(pid)
        return ids

    @staticmethod
    def of(
        invoice_id: str,
        *,
        before: Optional[Invoice] = None,
        after: Optional[Invoice] = None,
    ) -> "InvoiceWriteEvent":
        return InvoiceWriteEvent(
            invoice_id=invoice_id,
            before=None if before is None else replace(before),
            after=None if after is None else replace(after),
        )


__all__ = ["InvoiceWriteEvent", "InvoiceWriteKind"]
