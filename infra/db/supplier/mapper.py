from __future__ import annotations

from core.domain import Supplier
from infra.db.models import SupplierORM


def supplier_to_orm(supplier: Supplier) -> SupplierORM:
    return SupplierORM(
        id=supplier.id,
        name=supplier.name,
        tin=supplier.tin,
        created_at=supplier.created_at,
    )


def supplier_from_orm(obj: SupplierORM) -> Supplier:
    return Supplier(
        id=obj.id,
        name=obj.name,
        tin=obj.tin,
        created_at=obj.created_at,
    )


__all__ = ["supplier_to_orm", "supplier_from_orm"]
