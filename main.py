# main.py
"""
Project ledger command line.

Usage:
    python main.py recompute --project ID   # Recompute one project's invoice total
    python main.py recompute --all          # Recompute every project
    python main.py summary PROJECT_ID       # Financial summary as JSON
    python main.py overview                 # Budget vs. spent per project
    python main.py department-invoices UID  # A submitter's department invoices
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Sequence

from core.exceptions import DomainError
from infra.config import load_settings
from infra.logging_config import setup_logging
from infra.services import ServiceGraph, bootstrap

logger = logging.getLogger(__name__)


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def cmd_recompute(graph: ServiceGraph, args) -> int:
    trigger = graph.aggregation_trigger
    if args.all:
        outcomes = trigger.recompute_all_projects()
    else:
        outcomes = [trigger.recompute_project(args.project)]
    _print_json(
        [
            {
                "project_id": outcome.project_id,
                "status": outcome.status.value,
                "total": outcome.total,
                "error": outcome.error,
            }
            for outcome in outcomes
        ]
    )
    return 0 if all(outcome.ok for outcome in outcomes) else 1


def cmd_summary(graph: ServiceGraph, args) -> int:
    summary = graph.finance_service.get_financial_summary(args.project_id)
    _print_json(summary.as_dict())
    return 0


def cmd_overview(graph: ServiceGraph, args) -> int:
    rows = graph.finance_service.list_budget_overview()
    _print_json(
        [
            {
                "project_id": row.project_id,
                "name": row.name,
                "actual_budget": row.actual_budget,
                "spent": row.spent,
                "remaining": row.remaining,
            }
            for row in rows
        ]
    )
    return 0


def cmd_department_invoices(graph: ServiceGraph, args) -> int:
    rows = graph.department_invoice_service.list_submitter_invoice_rows(args.submitter_uid)
    _print_json(
        [
            {
                "invoice_id": row.invoice_id,
                "category": f"{row.primary_category} / {row.secondary_category}",
                "supplier": row.supplier_name,
                "amount": row.amount,
                "status": row.status.value,
                "uploaded_at": row.uploaded_at.isoformat() if row.uploaded_at else None,
            }
            for row in rows
        ]
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Project ledger")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # recompute
    p = subparsers.add_parser("recompute", help="Recompute aggregated invoice totals")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--project", help="Project ID")
    target.add_argument("--all", action="store_true", help="Every project")
    p.set_defaults(handler=cmd_recompute)

    # summary
    p = subparsers.add_parser("summary", help="Financial summary of one project")
    p.add_argument("project_id", help="Project ID")
    p.set_defaults(handler=cmd_summary)

    # overview
    p = subparsers.add_parser("overview", help="Budget overview of all projects")
    p.set_defaults(handler=cmd_overview)

    # department-invoices
    p = subparsers.add_parser("department-invoices", help="Department invoices of one submitter")
    p.add_argument("submitter_uid", help="Submitter user ID")
    p.set_defaults(handler=cmd_department_invoices)

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    graph_factory: Callable[[], ServiceGraph] | None = None,
) -> int:
    args = build_parser().parse_args(argv)

    if graph_factory is None:
        settings = load_settings()
        setup_logging(settings)
        graph = bootstrap(settings)
    else:
        graph = graph_factory()

    try:
        return args.handler(graph, args)
    except DomainError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error [{exc.code}]: {exc}", file=sys.stderr)
        return 2
    finally:
        graph.close()


if __name__ == "__main__":
    sys.exit(main())
