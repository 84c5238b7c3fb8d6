from .service import SupplierService

__all__ = ["SupplierService"]
