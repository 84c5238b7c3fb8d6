from __future__ import annotations

from typing import List

from core.domain import Project
from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository


class ProjectQueryMixin:
    _project_repo: ProjectRepository

    def get_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def list_projects(self) -> List[Project]:
        return self._project_repo.list_all()


__all__ = ["ProjectQueryMixin"]
