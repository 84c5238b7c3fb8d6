from __future__ import annotations

from sqlalchemy import create_engine, inspect

from infra.migrate import run_migrations


def test_migrations_create_schema(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'migrated.db').as_posix()}"

    run_migrations(db_url)

    engine = create_engine(db_url, future=True)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"projects", "suppliers", "invoices", "alembic_version"} <= tables
        project_columns = {c["name"] for c in inspector.get_columns("projects")}
        assert "total_non_cancelled_invoice_amount" in project_columns
        assert "version" in project_columns
        index_names = {i["name"] for i in inspector.get_indexes("invoices")}
        assert {"idx_invoices_project_status", "idx_invoices_supplier"} <= index_names
        assert {"department_invoices", "closing_documents"} <= tables
        document_columns = {c["name"] for c in inspector.get_columns("closing_documents")}
        assert {"project_id", "invoice_id", "department_invoice_id"} <= document_columns
        assert inspector.get_pk_constraint("department_invoices")["constrained_columns"] == ["id"]
    finally:
        engine.dispose()


def test_migrations_are_rerunnable(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'again.db').as_posix()}"

    run_migrations(db_url)
    run_migrations(db_url)
