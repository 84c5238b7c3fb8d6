"""create projects, suppliers and invoices

Revision ID: 4b9e1c2d7a10
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4b9e1c2d7a10"
down_revision = None
branch_labels = None
depends_on = None


_PROJECT_STATUSES = ("planning", "active", "in-progress", "on_hold", "completed", "cancelled")
_INVOICE_STATUSES = ("pending_payment", "paid", "overdue", "cancelled")


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("number", sa.String(length=64), nullable=True),
        sa.Column("customer", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*_PROJECT_STATUSES, name="projectstatus", native_enum=False, length=32),
            nullable=False,
        ),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("manager_id", sa.String(), nullable=True),
        sa.Column("planned_budget", sa.Float(), nullable=True),
        sa.Column("actual_budget", sa.Float(), nullable=True),
        sa.Column("planned_revenue", sa.Float(), nullable=True),
        sa.Column("actual_revenue", sa.Float(), nullable=True),
        sa.Column("usn_tax", sa.Float(), nullable=True),
        sa.Column("nds_tax", sa.Float(), nullable=True),
        sa.Column(
            "total_non_cancelled_invoice_amount",
            sa.Float(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "suppliers",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("tin", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tin"),
    )
    op.create_table(
        "invoices",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("supplier_id", sa.String(), nullable=True),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*_INVOICE_STATUSES, name="invoicestatus", native_enum=False, length=32),
            nullable=False,
        ),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("is_urgent", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("file_name", sa.String(), nullable=True),
        sa.Column("file_url", sa.String(), nullable=True),
        sa.Column("submitter_uid", sa.String(), nullable=True),
        sa.Column("submitter_name", sa.String(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_invoices_project_status", "invoices", ["project_id", "status"])
    op.create_index("idx_invoices_supplier", "invoices", ["supplier_id"])


def downgrade() -> None:
    op.drop_index("idx_invoices_supplier", table_name="invoices")
    op.drop_index("idx_invoices_project_status", table_name="invoices")
    op.drop_table("invoices")
    op.drop_table("suppliers")
    op.drop_table("projects")
