from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from core.domain import Project, ProjectStatus
from core.events.domain_events import DomainEvents
from core.exceptions import ConcurrencyError, NotFoundError, ValidationError
from core.interfaces import ProjectRepository
from core.services.project.validation import FINANCIAL_FIELDS, ProjectValidationMixin

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("number", "customer", "manager_id")


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository
    _events: DomainEvents

    def create_project(
        self,
        name: str,
        description: str = "",
        number: str | None = None,
        customer: str | None = None,
        status: ProjectStatus = ProjectStatus.PLANNING,
        due_date: date | None = None,
        manager_id: str | None = None,
        **financials: Any,
    ) -> Project:
        self._validate_project_name(name)
        unknown = set(financials) - set(FINANCIAL_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown project field(s): {', '.join(sorted(unknown))}.",
                code="PROJECT_FIELD_UNKNOWN",
            )
        values = {
            key: self._validate_financial_value(key, value)
            for key, value in financials.items()
        }
        project = Project.create(
            name=name.strip(),
            description=(description or "").strip(),
            number=(number or "").strip() or None,
            customer=(customer or "").strip() or None,
            status=ProjectStatus(status),
            due_date=due_date,
            manager_id=manager_id,
            **values,
        )

        try:
            self._project_repo.add(project)
            self._session.commit()
            logger.info("Created project %s - %s", project.id, project.name)
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise
        self._events.project_changed.emit(project.id)
        return project

    def update_project(
        self,
        project_id: str,
        expected_version: int | None = None,
        **changes: Any,
    ) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if expected_version is not None and project.version != expected_version:
            raise ConcurrencyError(
                "Project changed since you opened it. Refresh and try again.",
                code="STALE_WRITE",
            )

        allowed = {"name", "description", "status", "due_date", *_TEXT_FIELDS, *FINANCIAL_FIELDS}
        unknown = set(changes) - allowed
        if unknown:
            # total_non_cancelled_invoice_amount lands here too: it is derived.
            raise ValidationError(
                f"Field(s) cannot be updated: {', '.join(sorted(unknown))}.",
                code="PROJECT_FIELD_NOT_UPDATABLE",
            )

        if "name" in changes:
            self._validate_project_name(changes["name"])
            project.name = changes["name"].strip()
        if "description" in changes:
            project.description = (changes["description"] or "").strip()
        if "status" in changes:
            project.status = ProjectStatus(changes["status"])
        if "due_date" in changes:
            project.due_date = changes["due_date"]
        for key in _TEXT_FIELDS:
            if key in changes:
                setattr(project, key, (changes[key] or "").strip() or None)
        for key in FINANCIAL_FIELDS:
            if key in changes:
                setattr(project, key, self._validate_financial_value(key, changes[key]))

        try:
            self._project_repo.update(project)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._events.project_changed.emit(project.id)
        return project

    def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        return self.update_project(project_id, status=status)


__all__ = ["ProjectLifecycleMixin"]
