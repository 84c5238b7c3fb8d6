from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.domain import Project
from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from infra.db.models import ProjectORM
from infra.db.optimistic import update_with_version_check
from infra.db.project.mapper import project_from_orm, project_to_orm


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def update(self, project: Project) -> None:
        project.version = update_with_version_check(
            self.session,
            ProjectORM,
            project.id,
            getattr(project, "version", 1),
            {
                "name": project.name,
                "number": project.number,
                "customer": project.customer,
                "description": project.description,
                "status": project.status,
                "due_date": project.due_date,
                "manager_id": project.manager_id,
                "planned_budget": project.planned_budget,
                "actual_budget": project.actual_budget,
                "planned_revenue": project.planned_revenue,
                "actual_revenue": project.actual_revenue,
                "usn_tax": project.usn_tax,
                "nds_tax": project.nds_tax,
            },
            entity="project",
        )

    def set_invoice_total(self, project_id: str, total: float) -> None:
        # Only the aggregate column; version is left alone so caller-side
        # optimistic locks are not invalidated by recomputations.
        stmt = (
            update(ProjectORM)
            .where(ProjectORM.id == project_id)
            .values(total_non_cancelled_invoice_amount=float(total))
        )
        result = self.session.execute(stmt)
        if result.rowcount != 1:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_all(self) -> List[Project]:
        stmt = select(ProjectORM).order_by(ProjectORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_ids(self) -> List[str]:
        stmt = select(ProjectORM.id).order_by(ProjectORM.id)
        return list(self.session.execute(stmt).scalars().all())


__all__ = ["SqlAlchemyProjectRepository"]
