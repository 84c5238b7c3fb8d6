from __future__ import annotations

from typing import Generic, Hashable, Iterable, Optional, TypeVar

from core.services.common.batch_resolver import ReferenceBatchResolver, ResolutionResult

E = TypeVar("E")


class ReferenceCache(Generic[E]):
    """Caller-owned id -> entity cache for one request or render cycle.

    Entries are never refreshed; drop the cache (or ``clear()``) instead of
    treating it as authoritative across cycles.
    """

    def __init__(self, resolver: ReferenceBatchResolver[E]) -> None:
        self._resolver = resolver
        self._entries: dict[Hashable, E] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def ensure(self, ids: Iterable[Hashable]) -> ResolutionResult[E]:
        result = self._resolver.resolve_batches(ids, self._entries)
        self._entries.update(result.resolved)
        return result

    def get(self, key: Hashable) -> Optional[E]:
        return self._entries.get(key)

    def name_for(self, key: Hashable | None, default: str) -> str:
        entity = self._entries.get(key) if key else None
        name = getattr(entity, "name", None) if entity is not None else None
        return name or default

    def snapshot(self) -> dict[Hashable, E]:
        return dict(self._entries)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["ReferenceCache"]
