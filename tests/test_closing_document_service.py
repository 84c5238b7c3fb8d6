from __future__ import annotations

from datetime import date, datetime

import pytest

from core.domain import ClosingDocumentType
from core.exceptions import NotFoundError, ValidationError
from infra.db.models import ClosingDocumentORM


def test_one_document_per_selected_invoice(services, project_with_supplier):
    project, supplier = project_with_supplier
    inv_service = services["invoice_service"]
    first = inv_service.create_invoice(project.id, supplier.id, 100)
    second = inv_service.create_invoice(project.id, supplier.id, 200)
    changed: list[str] = []
    services["events"].closing_documents_changed.connect(changed.append)

    documents = services["closing_document_service"].attach_to_invoices(
        project.id,
        [first.id, second.id, first.id],
        "act-17.pdf",
        "https://files.example/act-17.pdf",
        doc_type="ACT",
        doc_date=date(2024, 3, 1),
        comment=" signed ",
    )

    assert [d.invoice_id for d in documents] == [first.id, second.id]
    assert {d.project_id for d in documents} == {project.id}
    assert all(d.doc_type == ClosingDocumentType.ACT for d in documents)
    assert documents[0].comment == "signed"
    assert len({d.id for d in documents}) == 2
    assert changed == [d.id for d in documents]


def test_attach_requires_file_and_invoice(services, project_with_supplier):
    project, supplier = project_with_supplier
    cds = services["closing_document_service"]
    invoice = services["invoice_service"].create_invoice(project.id, supplier.id, 100)

    with pytest.raises(ValidationError) as exc_info:
        cds.attach_to_invoices(project.id, [], "a.pdf", "https://files.example/a.pdf")
    assert exc_info.value.code == "CLOSING_DOC_INVOICE_REQUIRED"

    with pytest.raises(ValidationError) as exc_info:
        cds.attach_to_invoices(project.id, [invoice.id], " ", "https://files.example/a.pdf")
    assert exc_info.value.code == "CLOSING_DOC_FILE_REQUIRED"

    with pytest.raises(ValidationError) as exc_info:
        cds.attach_to_invoices(project.id, [invoice.id], "a.pdf", "u", doc_type="invoice")
    assert exc_info.value.code == "CLOSING_DOC_TYPE_INVALID"


def test_attach_rejects_invoice_of_another_project(services, project_with_supplier):
    project, supplier = project_with_supplier
    other = services["project_service"].create_project("Office")
    foreign = services["invoice_service"].create_invoice(other.id, supplier.id, 50)
    cds = services["closing_document_service"]

    with pytest.raises(ValidationError) as exc_info:
        cds.attach_to_invoices(project.id, [foreign.id], "a.pdf", "u")
    assert exc_info.value.code == "CLOSING_DOC_INVOICE_PROJECT_MISMATCH"

    with pytest.raises(NotFoundError) as exc_info:
        cds.attach_to_invoices(project.id, ["missing"], "a.pdf", "u")
    assert exc_info.value.code == "INVOICE_NOT_FOUND"

    with pytest.raises(NotFoundError) as exc_info:
        cds.attach_to_invoices("missing", [foreign.id], "a.pdf", "u")
    assert exc_info.value.code == "PROJECT_NOT_FOUND"

    assert cds.list_project_documents(project.id).count == 0


def test_project_documents_are_grouped_by_invoice(services, project_with_supplier, session_factory):
    project, supplier = project_with_supplier
    cds = services["closing_document_service"]
    invoice = services["invoice_service"].create_invoice(project.id, supplier.id, 100)
    older = cds.attach_to_invoices(project.id, [invoice.id], "contract.pdf", "u1", doc_type="contract")[0]
    newer = cds.attach_to_invoices(project.id, [invoice.id], "upd.pdf", "u2", doc_type="upd")[0]
    general = cds.attach_general_document(project.id, "schedule.xlsx", "u3")
    with session_factory() as session:
        session.get(ClosingDocumentORM, older.id).uploaded_at = datetime(2024, 1, 1)
        session.get(ClosingDocumentORM, newer.id).uploaded_at = datetime(2024, 2, 1)
        session.commit()
    services["session"].expire_all()

    grouped = cds.list_project_documents(project.id)

    assert [d.id for d in grouped.for_invoice(invoice.id)] == [newer.id, older.id]
    assert [d.id for d in grouped.general] == [general.id]
    assert grouped.for_invoice("other") == []
    assert grouped.count == 3


def test_department_invoice_documents(services, project_with_supplier):
    _, supplier = project_with_supplier
    department_invoice = services["department_invoice_service"].create_department_invoice(
        "HR", "Training", supplier.id, 300, submitter_uid="u-1"
    )
    cds = services["closing_document_service"]

    documents = cds.attach_to_department_invoices([department_invoice.id], "act.pdf", "u", doc_type="act")

    listed = cds.list_department_invoice_documents(department_invoice.id)
    assert [d.id for d in listed] == [documents[0].id]
    assert listed[0].project_id is None
    assert listed[0].invoice_id is None
    with pytest.raises(NotFoundError) as exc_info:
        cds.attach_to_department_invoices(["missing"], "act.pdf", "u")
    assert exc_info.value.code == "DEPARTMENT_INVOICE_NOT_FOUND"


def test_delete_document(services, project_with_supplier):
    project, _ = project_with_supplier
    cds = services["closing_document_service"]
    document = cds.attach_general_document(project.id, "note.pdf", "u")

    cds.delete_document(document.id)

    assert cds.list_project_documents(project.id).count == 0
    with pytest.raises(NotFoundError) as exc_info:
        cds.delete_document(document.id)
    assert exc_info.value.code == "CLOSING_DOC_NOT_FOUND"


def test_documents_do_not_change_project_totals(services, project_with_supplier, stored_total):
    project, supplier = project_with_supplier
    invoice = services["invoice_service"].create_invoice(project.id, supplier.id, 100)

    services["closing_document_service"].attach_to_invoices(project.id, [invoice.id], "a.pdf", "u")

    assert stored_total(project.id) == 100.0
