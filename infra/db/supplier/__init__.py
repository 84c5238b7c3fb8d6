from infra.db.supplier.mapper import supplier_from_orm, supplier_to_orm
from infra.db.supplier.repository import SqlAlchemySupplierRepository

__all__ = [
    "supplier_to_orm",
    "supplier_from_orm",
    "SqlAlchemySupplierRepository",
]
