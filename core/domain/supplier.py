from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.identifiers import generate_id, utc_now


@dataclass
class Supplier:
    id: str
    name: Optional[str] = None
    tin: Optional[str] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def create(name: str, tin: str) -> "Supplier":
        return Supplier(id=generate_id(), name=name, tin=tin, created_at=utc_now())


__all__ = ["Supplier"]
