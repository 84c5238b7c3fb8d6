from __future__ import annotations

import logging
from typing import Hashable, Iterable, List, Mapping

from sqlalchemy.orm import Session

from core.domain import Supplier
from core.events.domain_events import DomainEvents, domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import SupplierRepository
from core.services.common.batch_resolver import ReferenceBatchResolver
from core.services.common.reference_cache import ReferenceCache

logger = logging.getLogger(__name__)


def normalize_tin(value: str | None) -> str:
    return "".join((value or "").split())


class SupplierService:
    def __init__(
        self,
        session: Session,
        supplier_repo: SupplierRepository,
        events: DomainEvents | None = None,
    ):
        self._session: Session = session
        self._supplier_repo: SupplierRepository = supplier_repo
        self._events: DomainEvents = events or domain_events
        self._resolver: ReferenceBatchResolver[Supplier] = ReferenceBatchResolver(
            self._supplier_repo.list_by_ids,
            name="supplier",
        )

    def create_supplier(self, name: str, tin: str) -> Supplier:
        cleaned_name = (name or "").strip()
        cleaned_tin = normalize_tin(tin)
        if not cleaned_name:
            raise ValidationError("Supplier name is required.", code="SUPPLIER_NAME_EMPTY")
        if not cleaned_tin:
            raise ValidationError("Supplier TIN is required.", code="SUPPLIER_TIN_EMPTY")

        existing = self._supplier_repo.get_by_tin(cleaned_tin)
        if existing is not None:
            raise BusinessRuleError(
                f"Supplier with TIN {cleaned_tin} already exists: {existing.name}. Select it from the list.",
                code="SUPPLIER_TIN_DUPLICATE",
            )

        supplier = Supplier.create(name=cleaned_name, tin=cleaned_tin)
        try:
            self._supplier_repo.add(supplier)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating supplier: %s", e)
            raise

        logger.info("Created supplier %s - %s", supplier.id, supplier.name)
        self._events.suppliers_changed.emit(supplier.id)
        return supplier

    def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = self._supplier_repo.get(supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier not found.", code="SUPPLIER_NOT_FOUND")
        return supplier

    def list_suppliers(self) -> List[Supplier]:
        return self._supplier_repo.list_all()

    def resolve_suppliers(
        self,
        supplier_ids: Iterable[str],
        already_cached: Mapping[Hashable, Supplier] | None = None,
    ) -> dict[Hashable, Supplier]:
        """Suppliers for ``supplier_ids`` that are not in ``already_cached``.

        Raises PartialResolutionError only when every lookup batch failed.
        """
        return self._resolver.resolve(supplier_ids, already_cached)

    def new_supplier_cache(self) -> ReferenceCache[Supplier]:
        return ReferenceCache(self._resolver)


__all__ = ["SupplierService", "normalize_tin"]
