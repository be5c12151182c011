from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Ravisabha


class RavisabhaRepository(Protocol):
    def get_by_id(self, ravisabha_id: int) -> Optional[Ravisabha]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date) -> Sequence[Ravisabha]:
        """Sessions held within [start, end], newest first, with attendance counts."""

        raise NotImplementedError

    def create(
        self,
        *,
        held_on: date,
        prasad: Optional[str],
        expense: Optional[Decimal],
        yajman: Optional[str],
        notes: Optional[str],
    ) -> int:
        """Raises DuplicateKeyError when a session already exists on `held_on`."""

        raise NotImplementedError

    def update(self, ravisabha_id: int, *, fields: dict) -> bool:
        raise NotImplementedError

    def delete(self, ravisabha_id: int) -> bool:
        raise NotImplementedError
