# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.domain import ClosingDocumentType, DepartmentInvoiceStatus, InvoiceStatus, ProjectStatus
from infra.db.base import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    customer: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus, values_callable=_enum_values, native_enum=False, length=32),
        default=ProjectStatus.PLANNING,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    manager_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    planned_budget: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_budget: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    planned_revenue: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_revenue: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    usn_tax: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    nds_tax: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    total_non_cancelled_invoice_amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)


class SupplierORM(Base):
    __tablename__ = "suppliers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    tin: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, unique=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)


class InvoiceORM(Base):
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    supplier_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("suppliers.id", ondelete="SET NULL"),
        nullable=True,
    )
    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[InvoiceStatus] = mapped_column(
        SAEnum(InvoiceStatus, values_callable=_enum_values, native_enum=False, length=32),
        default=InvoiceStatus.PENDING_PAYMENT,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_urgent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    submitter_uid: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    submitter_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    uploaded_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

Index("idx_invoices_project_status", InvoiceORM.project_id, InvoiceORM.status)
Index("idx_invoices_supplier", InvoiceORM.supplier_id)


class DepartmentInvoiceORM(Base):
    __tablename__ = "department_invoices"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    primary_category: Mapped[str] = mapped_column(String, nullable=False)
    secondary_category: Mapped[str] = mapped_column(String, nullable=False)
    supplier_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("suppliers.id", ondelete="SET NULL"),
        nullable=True,
    )
    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[DepartmentInvoiceStatus] = mapped_column(
        SAEnum(DepartmentInvoiceStatus, values_callable=_enum_values, native_enum=False, length=32),
        default=DepartmentInvoiceStatus.PENDING_PAYMENT,
        nullable=False,
    )
    submitter_uid: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    submitter_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    uploaded_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

Index("idx_department_invoices_submitter", DepartmentInvoiceORM.submitter_uid, DepartmentInvoiceORM.uploaded_at)


class ClosingDocumentORM(Base):
    __tablename__ = "closing_documents"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
    )
    invoice_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("invoices.id", ondelete="SET NULL"),
        nullable=True,
    )
    department_invoice_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("department_invoices.id", ondelete="CASCADE"),
        nullable=True,
    )
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    file_url: Mapped[str] = mapped_column(String, nullable=False)
    doc_type: Mapped[Optional[ClosingDocumentType]] = mapped_column(
        SAEnum(ClosingDocumentType, values_callable=_enum_values, native_enum=False, length=32),
        nullable=True,
    )
    doc_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

Index("idx_closing_documents_project", ClosingDocumentORM.project_id, ClosingDocumentORM.uploaded_at)
Index("idx_closing_documents_department_invoice", ClosingDocumentORM.department_invoice_id)
