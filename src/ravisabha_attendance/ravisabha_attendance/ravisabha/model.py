from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Ravisabha:
    """A single dated gathering; at most one per calendar date."""

    ravisabha_id: int
    held_on: date
    prasad: Optional[str] = None
    expense: Optional[Decimal] = None
    yajman: Optional[str] = None
    notes: Optional[str] = None
    attendance_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.ravisabha_id,
            "date": self.held_on.isoformat(),
            "prasad": self.prasad,
            "expense": float(self.expense) if self.expense is not None else None,
            "yajman": self.yajman,
            "notes": self.notes,
            "attendanceCount": self.attendance_count,
        }
