from __future__ import annotations

import json

from core.domain import Invoice, InvoiceStatus
from core.events.models import InvoiceWriteEvent, InvoiceWriteKind
from core.services.aggregation import RecomputationStatus


def _invoice(project_id, amount=100.0, status=InvoiceStatus.PENDING_PAYMENT, invoice_id="inv-1"):
    return Invoice(id=invoice_id, project_id=project_id, supplier_id=None, amount=amount, status=status)


def test_total_tracks_non_cancelled_invoices(services, project_with_supplier, stored_total):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier

    inv_service.create_invoice(project.id, supplier.id, 100)
    inv_service.create_invoice(project.id, supplier.id, "250.50")
    inv_service.create_invoice(project.id, supplier.id, 40, status=InvoiceStatus.CANCELLED)

    assert stored_total(project.id) == 350.5


def test_cancel_and_uncancel_move_amount_in_and_out(services, project_with_supplier, stored_total):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    keep = inv_service.create_invoice(project.id, supplier.id, 100)
    toggled = inv_service.create_invoice(project.id, supplier.id, 60)

    inv_service.cancel_invoice(toggled.id)
    assert stored_total(project.id) == 100.0

    inv_service.set_status(toggled.id, InvoiceStatus.PAID)
    assert stored_total(project.id) == 160.0

    inv_service.update_invoice(keep.id, amount=10)
    assert stored_total(project.id) == 70.0


def test_delete_removes_contribution(services, project_with_supplier, stored_total):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    first = inv_service.create_invoice(project.id, supplier.id, 100)
    inv_service.create_invoice(project.id, supplier.id, 25)

    inv_service.delete_invoice(first.id)

    assert stored_total(project.id) == 25.0


def test_deleting_last_invoice_resets_total_to_zero(services, project_with_supplier, stored_total):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    only = inv_service.create_invoice(project.id, supplier.id, 75)

    inv_service.delete_invoice(only.id)

    assert stored_total(project.id) == 0.0


def test_moving_invoice_recomputes_both_projects(services, project_with_supplier, stored_total):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    other = services["project_service"].create_project("Office")
    invoice = inv_service.create_invoice(project.id, supplier.id, 300)

    inv_service.update_invoice(invoice.id, project_id=other.id)

    assert stored_total(project.id) == 0.0
    assert stored_total(other.id) == 300.0


def test_replayed_event_is_idempotent(services, project_with_supplier, stored_total):
    trigger = services["aggregation_trigger"]
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    seen: list[InvoiceWriteEvent] = []
    services["events"].invoice_written.connect(seen.append)
    inv_service.create_invoice(project.id, supplier.id, 120)

    first = trigger.handle(seen[0])
    second = trigger.handle(seen[0])

    assert seen[0].kind == InvoiceWriteKind.CREATED
    assert first[0].total == second[0].total == 120.0
    assert stored_total(project.id) == 120.0


def test_stale_event_still_writes_current_total(services, project_with_supplier, stored_total):
    trigger = services["aggregation_trigger"]
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    invoice = inv_service.create_invoice(project.id, supplier.id, 80)
    inv_service.create_invoice(project.id, supplier.id, 20)

    # Out-of-order delivery of the first write
    outcomes = trigger.handle(InvoiceWriteEvent.of(invoice.id, after=invoice))

    assert outcomes[0].total == 100.0
    assert stored_total(project.id) == 100.0


def test_invoice_without_project_is_skipped(services, project_with_supplier, stored_total):
    trigger = services["aggregation_trigger"]
    project, _ = project_with_supplier
    seen: list[str] = []
    services["events"].project_totals_changed.connect(seen.append)

    outcomes = trigger.handle(InvoiceWriteEvent.of("orphan", after=_invoice(None)))

    assert len(outcomes) == 1
    assert outcomes[0].status == RecomputationStatus.SKIPPED
    assert outcomes[0].project_id is None
    assert seen == []
    assert stored_total(project.id) == 0.0


def test_deleted_invoice_falls_back_to_previous_project(services, project_with_supplier, stored_total):
    trigger = services["aggregation_trigger"]
    project, _ = project_with_supplier

    outcomes = trigger.handle(InvoiceWriteEvent.of("gone", before=_invoice(project.id)))

    assert [o.project_id for o in outcomes] == [project.id]
    assert outcomes[0].status == RecomputationStatus.UPDATED
    assert stored_total(project.id) == 0.0


def test_missing_project_failure_is_absorbed_and_reported(services, support):
    trigger = services["aggregation_trigger"]

    outcomes = trigger.handle(InvoiceWriteEvent.of("inv-x", after=_invoice("no-such-project")))

    assert outcomes[0].status == RecomputationStatus.FAILED
    assert not outcomes[0].ok
    assert "no-such-project" in outcomes[0].error
    recorded = support.read_events()
    assert recorded[-1]["event_type"] == "aggregation.recompute_failed"
    assert recorded[-1]["data"]["project_id"] == "no-such-project"
    assert recorded[-1]["data"]["code"] == "RECOMPUTE_FAILED"


def test_failure_does_not_leak_into_next_recomputation(services, project_with_supplier, stored_total):
    trigger = services["aggregation_trigger"]
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    trigger.handle(InvoiceWriteEvent.of("inv-x", after=_invoice("no-such-project")))

    inv_service.create_invoice(project.id, supplier.id, 42)

    assert stored_total(project.id) == 42.0


def test_recompute_all_projects_repairs_drifted_totals(services, project_with_supplier, session_factory, stored_total):
    from infra.db.models import ProjectORM

    trigger = services["aggregation_trigger"]
    project, supplier = project_with_supplier
    other = services["project_service"].create_project("Empty")
    services["invoice_service"].create_invoice(project.id, supplier.id, 500)
    with session_factory() as session:
        session.get(ProjectORM, project.id).total_non_cancelled_invoice_amount = 1.0
        session.get(ProjectORM, other.id).total_non_cancelled_invoice_amount = 9.0
        session.commit()

    outcomes = trigger.recompute_all_projects()

    assert {o.project_id: o.total for o in outcomes} == {project.id: 500.0, other.id: 0.0}
    assert stored_total(project.id) == 500.0
    assert stored_total(other.id) == 0.0


def test_recomputation_emits_totals_changed(services, project_with_supplier):
    project, supplier = project_with_supplier
    seen: list[str] = []
    services["events"].project_totals_changed.connect(seen.append)

    services["invoice_service"].create_invoice(project.id, supplier.id, 5)

    assert seen == [project.id]


def test_recompute_does_not_bump_project_version(services, project_with_supplier):
    ps = services["project_service"]
    project, supplier = project_with_supplier

    services["invoice_service"].create_invoice(project.id, supplier.id, 5)
    updated = ps.update_project(project.id, name="Warehouse B", expected_version=project.version)

    assert updated.version == project.version + 1


def test_support_log_entries_are_valid_json(services, support):
    services["aggregation_trigger"].handle(InvoiceWriteEvent.of("inv-x", after=_invoice("missing")))

    for line in support.events_path.read_text(encoding="utf-8").splitlines():
        assert json.loads(line)["trace_id"]


def test_failing_totals_listener_does_not_reach_the_writer(services, project_with_supplier, stored_total):
    project, supplier = project_with_supplier

    def broken_listener(project_id):
        raise RuntimeError("dashboard offline")

    services["events"].project_totals_changed.connect(broken_listener)

    invoice = services["invoice_service"].create_invoice(project.id, supplier.id, 10)

    assert invoice.amount == 10.0
    assert stored_total(project.id) == 10.0


def test_failing_totals_listener_keeps_outcome_updated(services, project_with_supplier):
    project, _ = project_with_supplier
    services["events"].project_totals_changed.connect(lambda pid: 1 / 0)

    outcomes = services["aggregation_trigger"].handle(InvoiceWriteEvent.of("inv-1", after=_invoice(project.id)))

    assert [o.status for o in outcomes] == [RecomputationStatus.UPDATED]
    assert outcomes[0].total == 0.0


def test_moved_invoice_recomputes_both_projects_despite_failing_listener(
    services, project_with_supplier, stored_total
):
    inv_service = services["invoice_service"]
    project, supplier = project_with_supplier
    other = services["project_service"].create_project("Office")
    invoice = inv_service.create_invoice(project.id, supplier.id, 300)
    services["events"].project_totals_changed.connect(lambda pid: 1 / 0)

    inv_service.update_invoice(invoice.id, project_id=other.id)

    assert stored_total(other.id) == 300.0
    assert stored_total(project.id) == 0.0


class _BrokenSupport:
    def emit_event(self, **kwargs):
        raise OSError("disk full")


def test_unwritable_support_log_does_not_mask_failure_outcome(session_factory, events):
    from core.services.aggregation import InvoiceAggregationTrigger
    from infra.db.repositories import SqlAlchemyInvoiceRepository, SqlAlchemyProjectRepository

    trigger = InvoiceAggregationTrigger(
        session_factory,
        project_repo_factory=SqlAlchemyProjectRepository,
        invoice_repo_factory=SqlAlchemyInvoiceRepository,
        events=events,
        support=_BrokenSupport(),
    )

    outcomes = trigger.handle(InvoiceWriteEvent.of("inv-x", after=_invoice("missing")))

    assert outcomes[0].status == RecomputationStatus.FAILED
