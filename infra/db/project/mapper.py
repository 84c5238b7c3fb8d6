from __future__ import annotations

from core.domain import Project, ProjectStatus
from infra.db.models import ProjectORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        number=project.number,
        customer=project.customer,
        description=project.description,
        status=project.status,
        due_date=project.due_date,
        manager_id=project.manager_id,
        planned_budget=project.planned_budget,
        actual_budget=project.actual_budget,
        planned_revenue=project.planned_revenue,
        actual_revenue=project.actual_revenue,
        usn_tax=project.usn_tax,
        nds_tax=project.nds_tax,
        total_non_cancelled_invoice_amount=float(project.total_non_cancelled_invoice_amount or 0.0),
        version=getattr(project, "version", 1),
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        name=obj.name,
        number=obj.number,
        customer=obj.customer,
        description=obj.description or "",
        status=ProjectStatus(obj.status) if obj.status else ProjectStatus.PLANNING,
        due_date=obj.due_date,
        manager_id=obj.manager_id,
        planned_budget=obj.planned_budget,
        actual_budget=obj.actual_budget,
        planned_revenue=obj.planned_revenue,
        actual_revenue=obj.actual_revenue,
        usn_tax=obj.usn_tax,
        nds_tax=obj.nds_tax,
        total_non_cancelled_invoice_amount=float(obj.total_non_cancelled_invoice_amount or 0.0),
        version=getattr(obj, "version", 1),
    )


__all__ = ["project_to_orm", "project_from_orm"]
