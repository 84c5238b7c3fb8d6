from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain import Supplier
from core.exceptions import ValidationError
from core.interfaces import MAX_IN_QUERY_VALUES, SupplierRepository
from infra.db.models import SupplierORM
from infra.db.supplier.mapper import supplier_from_orm, supplier_to_orm


class SqlAlchemySupplierRepository(SupplierRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, supplier: Supplier) -> None:
        self.session.add(supplier_to_orm(supplier))

    def get(self, supplier_id: str) -> Optional[Supplier]:
        obj = self.session.get(SupplierORM, supplier_id)
        return supplier_from_orm(obj) if obj else None

    def get_by_tin(self, tin: str) -> Optional[Supplier]:
        stmt = select(SupplierORM).where(SupplierORM.tin == tin)
        obj = self.session.execute(stmt).scalars().first()
        return supplier_from_orm(obj) if obj else None

    def list_all(self) -> List[Supplier]:
        stmt = select(SupplierORM).order_by(SupplierORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [supplier_from_orm(row) for row in rows]

    def list_by_ids(self, supplier_ids: Iterable[str]) -> List[Supplier]:
        ids = list(supplier_ids)
        if not ids:
            return []
        if len(ids) > MAX_IN_QUERY_VALUES:
            raise ValidationError(
                f"At most {MAX_IN_QUERY_VALUES} ids per lookup, got {len(ids)}.",
                code="IN_QUERY_TOO_LARGE",
            )
        stmt = select(SupplierORM).where(SupplierORM.id.in_(ids))
        rows = self.session.execute(stmt).scalars().all()
        return [supplier_from_orm(row) for row in rows]


__all__ = ["SqlAlchemySupplierRepository"]
