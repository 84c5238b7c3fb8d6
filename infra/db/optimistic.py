from __future__ import annotations

from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, NotFoundError


def update_with_version_check(
    session: Session,
    orm_type: type[Any],
    row_id: str,
    expected_version: int,
    values: dict[str, Any],
    *,
    entity: str,
) -> int:
    """Write ``values`` only if the row still carries ``expected_version``.

    Returns the bumped version. A missing row raises NotFoundError, a row
    with another version raises ConcurrencyError.
    """
    next_version = int(expected_version) + 1
    stmt = (
        update(orm_type)
        .where(orm_type.id == row_id, orm_type.version == expected_version)
        .values(**values, version=next_version)
    )
    result = session.execute(stmt)
    if result.rowcount == 1:
        return next_version

    code_prefix = entity.upper().replace(" ", "_")
    if session.get(orm_type, row_id) is None:
        raise NotFoundError(f"{entity.capitalize()} not found.", code=f"{code_prefix}_NOT_FOUND")
    raise ConcurrencyError(
        f"{entity.capitalize()} was updated by another user.",
        code="STALE_WRITE",
    )


__all__ = ["update_with_version_check"]
