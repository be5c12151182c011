from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..attendance.scope import resolve_scope
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_text, parse_amount, parse_identifier, require_non_empty
from ..core.exceptions import DuplicateKeyError, NotFoundError
from .model import Ravisabha
from .repository import RavisabhaRepository

logger = logging.getLogger(__name__)

_DUPLICATE_DATE = "Ravisabha already exists for this date"


class RavisabhaService:
    """Use cases for gatherings (sessions) that attendance can be scoped to."""

    def __init__(self, sessions: RavisabhaRepository):
        self._sessions = sessions

    def list_sessions(
        self,
        *,
        month: Optional[str] = None,
        year: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[Ravisabha]:
        """startDate+endDate > month > year > current month."""

        if not any(v and str(v).strip() for v in (month, year, start_date, end_date)):
            month = (today or now_local().date()).strftime("%Y-%m")
        scope = resolve_scope(start_date=start_date, end_date=end_date, month=month, year=year)
        return list(self._sessions.list_range(start=scope.start.date(), end=scope.end.date()))

    def get(self, ravisabha_id) -> Ravisabha:
        found = self._sessions.get_by_id(parse_identifier(ravisabha_id, "ravisabha id"))
        if not found:
            raise NotFoundError("Ravisabha not found")
        return found

    def create(self, *, held_on, prasad=None, expense=None, yajman=None, notes=None) -> int:
        day = parse_iso_date(require_non_empty(held_on, "Date"))
        try:
            ravisabha_id = self._sessions.create(
                held_on=day,
                prasad=optional_text(prasad),
                expense=parse_amount(expense, "Expense"),
                yajman=optional_text(yajman),
                notes=optional_text(notes),
            )
        except DuplicateKeyError:
            raise DuplicateKeyError(_DUPLICATE_DATE)
        logger.info("ravisabha %s created for %s", ravisabha_id, day)
        return ravisabha_id

    def update(self, ravisabha_id, changes: dict) -> Ravisabha:
        """Partial update: keys absent from `changes` are left untouched, blank values clear."""

        ident = parse_identifier(ravisabha_id, "ravisabha id")
        fields: dict = {}
        if changes.get("date"):
            fields["held_on"] = parse_iso_date(changes["date"])
        for key in ("prasad", "yajman", "notes"):
            if key in changes:
                fields[key] = optional_text(changes[key])
        if "expense" in changes:
            fields["expense"] = parse_amount(changes["expense"], "Expense")

        try:
            updated = self._sessions.update(ident, fields=fields)
        except DuplicateKeyError:
            raise DuplicateKeyError(_DUPLICATE_DATE)
        if not updated:
            raise NotFoundError("Ravisabha not found")
        return self.get(ident)

    def delete(self, ravisabha_id) -> None:
        ident = parse_identifier(ravisabha_id, "ravisabha id")
        if not self._sessions.delete(ident):
            raise NotFoundError("Ravisabha not found")
        logger.info("ravisabha %s deleted", ident)
