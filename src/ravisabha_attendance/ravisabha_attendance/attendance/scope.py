"""Scope resolution: turn request parameters into a concrete store query scope.

A scope is either a session (Ravisabha) reference, which bypasses date
filtering, or a closed local interval ``[start 00:00:00.000, end 23:59:59.999]``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import (
    end_of_day,
    month_bounds,
    months_back,
    parse_iso_date,
    parse_month,
    parse_year,
    start_of_day,
    year_bounds,
)
from ..common.validators import parse_identifier
from ..core.enums import RangePreset
from ..core.exceptions import MissingScopeError, ValidationError


@dataclass(frozen=True)
class Scope:
    session_ref: Optional[int] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.session_ref is None and (self.start is None or self.end is None):
            raise MissingScopeError()

    @property
    def is_session(self) -> bool:
        return self.session_ref is not None

    @classmethod
    def for_session(cls, session_ref) -> "Scope":
        return cls(session_ref=parse_identifier(session_ref, "ravisabhaId"))

    @classmethod
    def for_dates(cls, start: date, end: date) -> "Scope":
        if start > end:
            raise ValidationError("startDate must not be after endDate")
        return cls(start=start_of_day(start), end=end_of_day(end))

    @classmethod
    def for_day(cls, day: date) -> "Scope":
        return cls.for_dates(day, day)

    @property
    def tag(self) -> str:
        """Stable identity used to discard responses for superseded scopes."""

        if self.is_session:
            return f"session:{self.session_ref}"
        return f"range:{self.start.isoformat()}/{self.end.isoformat()}"

    def describe(self) -> dict:
        if self.is_session:
            return {"ravisabhaId": self.session_ref}
        return {"startDate": self.start.date().isoformat(), "endDate": self.end.date().isoformat()}


def _given(value) -> bool:
    return value is not None and str(value).strip() != ""


def resolve_scope(
    *,
    session_ref=None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    date: Optional[str] = None,
    month: Optional[str] = None,
    year: Optional[str] = None,
) -> Scope:
    """Resolve request parameters, highest precedence first.

    session > startDate+endDate (both required) > date > month > year.
    Raises MissingScopeError when nothing usable was supplied.
    """
    if _given(session_ref):
        return Scope.for_session(session_ref)
    if _given(start_date) and _given(end_date):
        return Scope.for_dates(parse_iso_date(start_date), parse_iso_date(end_date))
    if _given(date):
        return Scope.for_day(parse_iso_date(date))
    if _given(month):
        start, end = month_bounds(*parse_month(month))
        return Scope(start=start, end=end)
    if _given(year):
        start, end = year_bounds(parse_year(year))
        return Scope(start=start, end=end)
    raise MissingScopeError()


def resolve_range_preset(
    preset: str,
    *,
    today: date,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Scope:
    """Export page ranges, always ending today (custom excepted)."""

    try:
        choice = RangePreset(preset)
    except ValueError:
        raise ValidationError(f"Unknown range: {preset!r}")

    if choice is RangePreset.THIS_MONTH:
        return Scope.for_dates(today.replace(day=1), today)
    if choice is RangePreset.LAST_3_MONTHS:
        return Scope.for_dates(months_back(today, 3), today)
    if choice is RangePreset.LAST_6_MONTHS:
        return Scope.for_dates(months_back(today, 6), today)

    if not (_given(start_date) and _given(end_date)):
        raise MissingScopeError("Custom range needs both startDate and endDate")
    return Scope.for_dates(parse_iso_date(start_date), parse_iso_date(end_date))
