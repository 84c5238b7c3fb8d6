from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class RecomputationStatus(str, Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RecomputationOutcome:
    status: RecomputationStatus
    project_id: str | None
    invoice_id: str | None = None
    total: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != RecomputationStatus.FAILED


def sum_invoice_amounts(amounts: Iterable[float | None]) -> float:
    return float(sum(float(amount or 0.0) for amount in amounts))


__all__ = ["RecomputationStatus", "RecomputationOutcome", "sum_invoice_amounts"]
