from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    IN_PROGRESS = "in-progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InvoiceStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class DepartmentInvoiceStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    CANCELLED = "cancelled"


class ClosingDocumentType(str, Enum):
    CONTRACT = "contract"
    UPD = "upd"  # universal transfer document
    ACT = "act"
    OTHER = "other"


__all__ = ["ProjectStatus", "InvoiceStatus", "DepartmentInvoiceStatus", "ClosingDocumentType"]
