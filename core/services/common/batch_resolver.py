from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, Iterable, Iterator, Mapping, TypeVar

from core.exceptions import PartialResolutionError
from core.interfaces import MAX_IN_QUERY_VALUES

logger = logging.getLogger(__name__)

E = TypeVar("E")

# Hard limit of the store's "value in set" query, not a tuning knob.
MAX_BATCH_SIZE = MAX_IN_QUERY_VALUES


def _entity_id(entity: Any) -> Hashable:
    return getattr(entity, "id")


def chunked(values: list[Any], size: int) -> Iterator[list[Any]]:
    for start in range(0, len(values), size):
        yield values[start:start + size]


def missing_ids(ids: Iterable[Hashable], already_cached: Mapping[Hashable, Any]) -> list[Hashable]:
    """Distinct, non-empty ids not in ``already_cached``, in first-seen order."""
    seen: dict[Hashable, None] = {}
    for item in ids:
        if not item or item in already_cached or item in seen:
            continue
        seen[item] = None
    return list(seen)


@dataclass
class ResolutionResult(Generic[E]):
    resolved: dict[Hashable, E] = field(default_factory=dict)
    failed_ids: list[Hashable] = field(default_factory=list)
    errors: list[BaseException] = field(default_factory=list)
    batches: int = 0

    @property
    def failed_batches(self) -> int:
        return len(self.errors)

    @property
    def complete(self) -> bool:
        return not self.errors


class ReferenceBatchResolver(Generic[E]):
    """Resolves referenced entities by id in bounded "id in set" batches.

    ``lookup`` receives at most ``max_batch_size`` distinct ids and returns the
    entities it found; ids it does not return simply stay unresolved. One
    failing batch never voids the others.
    """

    def __init__(
        self,
        lookup: Callable[[list[Hashable]], Iterable[E]],
        *,
        key: Callable[[E], Hashable] = _entity_id,
        max_batch_size: int = MAX_BATCH_SIZE,
        name: str = "reference",
    ) -> None:
        if max_batch_size <= 0 or max_batch_size > MAX_BATCH_SIZE:
            raise ValueError(f"max_batch_size must be within 1..{MAX_BATCH_SIZE}, got {max_batch_size}")
        self._lookup = lookup
        self._key = key
        self._max_batch_size = max_batch_size
        self._name = name

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    def resolve_batches(
        self,
        ids: Iterable[Hashable],
        already_cached: Mapping[Hashable, Any] | None = None,
    ) -> ResolutionResult[E]:
        result: ResolutionResult[E] = ResolutionResult()
        missing = missing_ids(ids, already_cached or {})
        if not missing:
            return result

        for batch in chunked(missing, self._max_batch_size):
            result.batches += 1
            try:
                found = list(self._lookup(list(batch)))
            except Exception as exc:
                logger.warning(
                    "%s lookup batch %d (%d ids) failed: %s",
                    self._name,
                    result.batches,
                    len(batch),
                    exc,
                )
                result.errors.append(exc)
                result.failed_ids.extend(batch)
                continue
            for entity in found:
                result.resolved[self._key(entity)] = entity

        logger.debug(
            "Resolved %d/%d %s ids in %d batch(es), %d failed",
            len(result.resolved),
            len(missing),
            self._name,
            result.batches,
            result.failed_batches,
        )
        return result

    def resolve(
        self,
        ids: Iterable[Hashable],
        already_cached: Mapping[Hashable, Any] | None = None,
    ) -> dict[Hashable, E]:
        result = self.resolve_batches(ids, already_cached)
        if result.batches and result.failed_batches == result.batches:
            raise PartialResolutionError(
                f"All {result.batches} {self._name} lookup batch(es) failed.",
                resolved=result.resolved,
                failed_ids=[str(item) for item in result.failed_ids],
                errors=result.errors,
                code="REFERENCE_RESOLUTION_FAILED",
            )
        return result.resolved


__all__ = [
    "MAX_BATCH_SIZE",
    "ReferenceBatchResolver",
    "ResolutionResult",
    "chunked",
    "missing_ids",
]
