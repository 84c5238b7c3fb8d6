# core/exceptions.py
from __future__ import annotations

from typing import Any, Mapping


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str,*, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., duplicate supplier TIN)."""


class ConcurrencyError(DomainError):
    """Raised when optimistic locking detects a stale update."""


class MissingAssociationError(DomainError):
    """An invoice write that resolves to no project; aggregation is skipped."""


class RecomputationFailure(DomainError):
    """Query or write failure while recomputing a project's invoice total."""

    def __init__(self, message: str, *, project_id: str, code: str | None = None):
        super().__init__(message, code=code)
        self.project_id = project_id


class PartialResolutionError(DomainError):
    """One or more reference lookup batches failed.

    ``resolved`` holds whatever the successful batches returned so callers can
    still use it and re-request ``failed_ids`` later.
    """

    def __init__(
        self,
        message: str,
        *,
        resolved: Mapping[str, Any] | None = None,
        failed_ids: list[str] | None = None,
        errors: list[BaseException] | None = None,
        code: str | None = None,
    ):
        super().__init__(message, code=code)
        self.resolved: dict[str, Any] = dict(resolved or {})
        self.failed_ids: list[str] = list(failed_ids or [])
        self.errors: list[BaseException] = list(errors or [])
