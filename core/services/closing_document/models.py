from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from core.domain import ClosingDocument


@dataclass
class ProjectClosingDocuments:
    """A project's closing documents keyed by the invoice they close.

    Documents that name no invoice land in ``general``. Each list keeps
    newest-first upload order.
    """

    project_id: str
    by_invoice: Dict[str, List[ClosingDocument]] = field(default_factory=dict)
    general: List[ClosingDocument] = field(default_factory=list)

    def for_invoice(self, invoice_id: str) -> List[ClosingDocument]:
        return list(self.by_invoice.get(invoice_id, []))

    @property
    def count(self) -> int:
        return len(self.general) + sum(len(docs) for docs in self.by_invoice.values())


__all__ = ["ProjectClosingDocuments"]
