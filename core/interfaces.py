# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from core.domain import ClosingDocument, DepartmentInvoice, Invoice, Project, Supplier

# Upper bound of a single "value in set" lookup against the store.
MAX_IN_QUERY_VALUES = 30


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def update(self, project: Project) -> None:
        """Persist caller-owned fields; never the aggregated invoice total."""

    @abstractmethod
    def set_invoice_total(self, project_id: str, total: float) -> None:
        """Single-field update of the aggregated invoice total."""

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...

    @abstractmethod
    def list_ids(self) -> List[str]: ...


class InvoiceRepository(ABC):
    @abstractmethod
    def add(self, invoice: Invoice) -> None: ...

    @abstractmethod
    def update(self, invoice: Invoice) -> None: ...

    @abstractmethod
    def delete(self, invoice_id: str) -> None: ...

    @abstractmethod
    def get(self, invoice_id: str) -> Optional[Invoice]: ...

    @abstractmethod
    def list_by_project(self, project_id: str, *, include_cancelled: bool = True) -> List[Invoice]: ...

    @abstractmethod
    def list_non_cancelled_amounts(self, project_id: str) -> List[Optional[float]]: ...


class SupplierRepository(ABC):
    @abstractmethod
    def add(self, supplier: Supplier) -> None: ...

    @abstractmethod
    def get(self, supplier_id: str) -> Optional[Supplier]: ...

    @abstractmethod
    def get_by_tin(self, tin: str) -> Optional[Supplier]: ...

    @abstractmethod
    def list_all(self) -> List[Supplier]: ...

    @abstractmethod
    def list_by_ids(self, supplier_ids: Iterable[str]) -> List[Supplier]:
        """One "id in set" query; at most MAX_IN_QUERY_VALUES ids."""


class DepartmentInvoiceRepository(ABC):
    @abstractmethod
    def add(self, invoice: DepartmentInvoice) -> None: ...

    @abstractmethod
    def update(self, invoice: DepartmentInvoice) -> None: ...

    @abstractmethod
    def delete(self, invoice_id: str) -> None: ...

    @abstractmethod
    def get(self, invoice_id: str) -> Optional[DepartmentInvoice]: ...

    @abstractmethod
    def list_by_submitter(self, submitter_uid: str) -> List[DepartmentInvoice]:
        """Newest upload first."""


class ClosingDocumentRepository(ABC):
    @abstractmethod
    def add(self, document: ClosingDocument) -> None: ...

    @abstractmethod
    def delete(self, document_id: str) -> None: ...

    @abstractmethod
    def get(self, document_id: str) -> Optional[ClosingDocument]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ClosingDocument]:
        """Newest upload first."""

    @abstractmethod
    def list_by_department_invoice(self, department_invoice_id: str) -> List[ClosingDocument]: ...


__all__ = [
    "MAX_IN_QUERY_VALUES",
    "ProjectRepository",
    "InvoiceRepository",
    "SupplierRepository",
    "DepartmentInvoiceRepository",
    "ClosingDocumentRepository",
]
