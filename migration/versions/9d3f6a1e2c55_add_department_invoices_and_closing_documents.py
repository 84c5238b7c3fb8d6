"""add department invoices and closing documents

Revision ID: 9d3f6a1e2c55
Revises: 4b9e1c2d7a10
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "9d3f6a1e2c55"
down_revision = "4b9e1c2d7a10"
branch_labels = None
depends_on = None


_DEPARTMENT_INVOICE_STATUSES = ("pending_payment", "paid", "cancelled")
_CLOSING_DOCUMENT_TYPES = ("contract", "upd", "act", "other")


def upgrade() -> None:
    op.create_table(
        "department_invoices",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("primary_category", sa.String(), nullable=False),
        sa.Column("secondary_category", sa.String(), nullable=False),
        sa.Column("supplier_id", sa.String(), nullable=True),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                *_DEPARTMENT_INVOICE_STATUSES,
                name="departmentinvoicestatus",
                native_enum=False,
                length=32,
            ),
            nullable=False,
        ),
        sa.Column("submitter_uid", sa.String(), nullable=True),
        sa.Column("submitter_name", sa.String(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("file_name", sa.String(), nullable=True),
        sa.Column("file_url", sa.String(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_department_invoices_submitter",
        "department_invoices",
        ["submitter_uid", "uploaded_at"],
    )
    op.create_table(
        "closing_documents",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("invoice_id", sa.String(), nullable=True),
        sa.Column("department_invoice_id", sa.String(), nullable=True),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column(
            "doc_type",
            sa.Enum(*_CLOSING_DOCUMENT_TYPES, name="closingdocumenttype", native_enum=False, length=32),
            nullable=True,
        ),
        sa.Column("doc_date", sa.Date(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["department_invoice_id"],
            ["department_invoices.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_closing_documents_project", "closing_documents", ["project_id", "uploaded_at"])
    op.create_index(
        "idx_closing_documents_department_invoice",
        "closing_documents",
        ["department_invoice_id"],
    )


def downgrade() -> None:
    op.drop_index("idx_closing_documents_department_invoice", table_name="closing_documents")
    op.drop_index("idx_closing_documents_project", table_name="closing_documents")
    op.drop_table("closing_documents")
    op.drop_index("idx_department_invoices_submitter", table_name="department_invoices")
    op.drop_table("department_invoices")
