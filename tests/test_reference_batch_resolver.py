from __future__ import annotations

from dataclasses import dataclass

import pytest

from core.exceptions import PartialResolutionError
from core.services.common.batch_resolver import (
    MAX_BATCH_SIZE,
    ReferenceBatchResolver,
    chunked,
    missing_ids,
)
from core.services.common.reference_cache import ReferenceCache


@dataclass
class _Ref:
    id: str
    name: str


class _Lookup:
    """Records every batch it receives; fails on the listed call numbers."""

    def __init__(self, known: set[str] | None = None, fail_on: set[int] | None = None) -> None:
        self.known = known
        self.fail_on = fail_on or set()
        self.calls: list[list[str]] = []

    def __call__(self, ids: list[str]) -> list[_Ref]:
        self.calls.append(list(ids))
        if len(self.calls) in self.fail_on:
            raise ConnectionError(f"lookup {len(self.calls)} unavailable")
        return [_Ref(i, f"name-{i}") for i in ids if self.known is None or i in self.known]


def _ids(count: int) -> list[str]:
    return [f"s{n:03d}" for n in range(count)]


def test_duplicate_ids_are_requested_once():
    lookup = _Lookup()
    resolver = ReferenceBatchResolver(lookup)

    resolved = resolver.resolve(["A", "A", "B"])

    assert lookup.calls == [["A", "B"]]
    assert set(resolved) == {"A", "B"}


def test_sixty_five_ids_are_fetched_in_three_batches():
    lookup = _Lookup()
    resolver = ReferenceBatchResolver(lookup)

    resolved = resolver.resolve(_ids(65))

    assert [len(batch) for batch in lookup.calls] == [30, 30, 5]
    assert len(resolved) == 65
    assert all(len(batch) <= MAX_BATCH_SIZE for batch in lookup.calls)


def test_failed_middle_batch_keeps_results_of_the_others():
    lookup = _Lookup(fail_on={2})
    resolver = ReferenceBatchResolver(lookup)
    ids = _ids(65)

    result = resolver.resolve_batches(ids)

    assert result.batches == 3
    assert result.failed_batches == 1
    assert not result.complete
    assert result.failed_ids == ids[30:60]
    assert set(result.resolved) == set(ids[:30]) | set(ids[60:])
    assert isinstance(result.errors[0], ConnectionError)


def test_resolve_returns_partial_results_when_some_batches_fail():
    resolver = ReferenceBatchResolver(_Lookup(fail_on={1}))

    resolved = resolver.resolve(_ids(40))

    assert set(resolved) == set(_ids(40)[30:])


def test_resolve_raises_when_every_batch_fails():
    resolver = ReferenceBatchResolver(_Lookup(fail_on={1, 2}), name="supplier")

    with pytest.raises(PartialResolutionError) as exc_info:
        resolver.resolve(_ids(31))

    assert exc_info.value.code == "REFERENCE_RESOLUTION_FAILED"
    assert exc_info.value.resolved == {}
    assert exc_info.value.failed_ids == _ids(31)
    assert len(exc_info.value.errors) == 2


def test_already_cached_ids_issue_no_lookup():
    lookup = _Lookup()
    resolver = ReferenceBatchResolver(lookup)
    cached = {"A": _Ref("A", "a"), "B": _Ref("B", "b")}

    resolved = resolver.resolve(["A", "B", "A"], already_cached=cached)

    assert resolved == {}
    assert lookup.calls == []


def test_only_uncached_ids_are_requested():
    lookup = _Lookup()
    resolver = ReferenceBatchResolver(lookup)

    resolved = resolver.resolve(["A", "C", "B"], already_cached={"B": _Ref("B", "b")})

    assert lookup.calls == [["A", "C"]]
    assert set(resolved) == {"A", "C"}


def test_unknown_ids_stay_unresolved_without_error():
    resolver = ReferenceBatchResolver(_Lookup(known={"A"}))

    result = resolver.resolve_batches(["A", "ghost"])

    assert set(result.resolved) == {"A"}
    assert result.complete
    assert result.failed_ids == []


def test_empty_and_missing_ids_are_ignored():
    lookup = _Lookup()
    resolver = ReferenceBatchResolver(lookup)

    assert resolver.resolve([None, "", None]) == {}
    assert lookup.calls == []


def test_batch_size_cannot_exceed_store_limit():
    with pytest.raises(ValueError):
        ReferenceBatchResolver(_Lookup(), max_batch_size=MAX_BATCH_SIZE + 1)
    with pytest.raises(ValueError):
        ReferenceBatchResolver(_Lookup(), max_batch_size=0)


def test_smaller_batch_size_is_honoured():
    lookup = _Lookup()
    ReferenceBatchResolver(lookup, max_batch_size=10).resolve(_ids(25))

    assert [len(batch) for batch in lookup.calls] == [10, 10, 5]


def test_chunk_and_missing_id_helpers():
    assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    assert list(chunked([], 3)) == []
    assert missing_ids(["b", "a", "b", None, "c"], {"c": object()}) == ["b", "a"]


def test_reference_cache_fills_once_and_retries_failed_ids():
    lookup = _Lookup(fail_on={1})
    cache: ReferenceCache[_Ref] = ReferenceCache(ReferenceBatchResolver(lookup, max_batch_size=2))

    first = cache.ensure(["A", "B", "C"])
    assert first.failed_ids == ["A", "B"]
    assert "C" in cache and "A" not in cache

    second = cache.ensure(["A", "B", "C"])
    assert second.complete
    assert lookup.calls == [["A", "B"], ["C"], ["A", "B"]]
    assert len(cache) == 3
    assert cache.name_for("A", "Unknown") == "name-A"
    assert cache.name_for("ghost", "Unknown") == "Unknown"
    assert cache.name_for(None, "Unknown") == "Unknown"

    cache.clear()
    assert cache.snapshot() == {}
