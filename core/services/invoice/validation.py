from __future__ import annotations

import math
from typing import Any

from core.domain import InvoiceStatus
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository, SupplierRepository


def parse_amount(value: Any) -> float:
    """Amounts arrive as numbers or as text such as ``"12 500.50"``."""
    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount is required.", code="INVOICE_AMOUNT_REQUIRED")
    if isinstance(value, str):
        text = "".join(value.split())
        if not text:
            raise ValidationError("Amount is required.", code="INVOICE_AMOUNT_REQUIRED")
        try:
            amount = float(text)
        except ValueError:
            raise ValidationError("Amount must be a number.", code="INVOICE_AMOUNT_INVALID") from None
    elif isinstance(value, (int, float)):
        amount = float(value)
    else:
        raise ValidationError("Amount must be a number.", code="INVOICE_AMOUNT_INVALID")

    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError("Amount must be a number.", code="INVOICE_AMOUNT_INVALID")
    if amount <= 0:
        raise ValidationError("Amount must be positive.", code="INVOICE_AMOUNT_NOT_POSITIVE")
    return amount


def coerce_status(value: Any) -> InvoiceStatus:
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown invoice status: {value!r}.", code="INVOICE_STATUS_INVALID") from None


class InvoiceValidationMixin:
    _project_repo: ProjectRepository
    _supplier_repo: SupplierRepository

    def _require_reference(self, value: str | None, *, label: str, code: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValidationError(f"{label} is required.", code=code)
        return cleaned

    def _validate_project(self, project_id: str) -> None:
        if self._project_repo.get(project_id) is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

    def _validate_supplier(self, supplier_id: str) -> None:
        if self._supplier_repo.get(supplier_id) is None:
            raise NotFoundError("Supplier not found.", code="SUPPLIER_NOT_FOUND")


__all__ = ["InvoiceValidationMixin", "parse_amount", "coerce_status"]
