from __future__ import annotations

import logging
from typing import List

from core.domain import Invoice, Supplier
from core.interfaces import InvoiceRepository, SupplierRepository
from core.services.common.batch_resolver import ReferenceBatchResolver
from core.services.common.reference_cache import ReferenceCache
from core.services.invoice.models import NO_SUPPLIER_LABEL, UNKNOWN_SUPPLIER_LABEL, InvoiceRow

logger = logging.getLogger(__name__)


class InvoiceQueryMixin:
    _invoice_repo: InvoiceRepository
    _supplier_repo: SupplierRepository

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return self._invoice_repo.get(invoice_id)

    def list_project_invoices(self, project_id: str, *, include_cancelled: bool = True) -> List[Invoice]:
        return self._invoice_repo.list_by_project(project_id, include_cancelled=include_cancelled)

    def list_project_invoice_rows(
        self,
        project_id: str,
        *,
        supplier_cache: ReferenceCache[Supplier] | None = None,
    ) -> List[InvoiceRow]:
        invoices = self._invoice_repo.list_by_project(project_id)
        cache = supplier_cache if supplier_cache is not None else self._new_supplier_cache()
        result = cache.ensure(inv.supplier_id for inv in invoices)
        if not result.complete:
            logger.warning(
                "Supplier names unavailable for %d id(s) on project %s",
                len(result.failed_ids),
                project_id,
            )

        rows: List[InvoiceRow] = []
        for inv in invoices:
            if inv.supplier_id:
                supplier_name = cache.name_for(inv.supplier_id, UNKNOWN_SUPPLIER_LABEL)
            else:
                supplier_name = NO_SUPPLIER_LABEL
            rows.append(
                InvoiceRow(
                    invoice_id=inv.id,
                    project_id=inv.project_id,
                    supplier_id=inv.supplier_id,
                    supplier_name=supplier_name,
                    amount=float(inv.amount or 0.0),
                    status=inv.status,
                    due_date=inv.due_date,
                    is_urgent=inv.is_urgent,
                    uploaded_at=inv.uploaded_at,
                )
            )
        return rows

    def _new_supplier_cache(self) -> ReferenceCache[Supplier]:
        return ReferenceCache(ReferenceBatchResolver(self._supplier_repo.list_by_ids, name="supplier"))


__all__ = ["InvoiceQueryMixin"]
