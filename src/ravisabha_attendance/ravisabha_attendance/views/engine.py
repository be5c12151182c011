"""Filter/sort/paginate engine over an already-projected record set.

Everything here is synchronous and in-memory; for well-formed state nothing
raises, and an empty input always renders as page 1 of 1.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence

from ..attendance.model import AttendanceRecord, GenderSummary
from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_KEY,
    STATUS_FILTER_ALL,
)
from ..core.enums import AttendanceStatus, Gender, SortDirection, SortKey
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Filters:
    name: str = ""
    member_no: str = ""
    mobile_no: str = ""
    date: str = ""
    status: str = STATUS_FILTER_ALL

    @property
    def is_active(self) -> bool:
        return bool(self.name or self.member_no or self.mobile_no or self.date) or self.status != STATUS_FILTER_ALL

    @staticmethod
    def normalize_status(value: Optional[str]) -> str:
        v = (value or "").strip()
        if not v or v.lower() == STATUS_FILTER_ALL.lower():
            return STATUS_FILTER_ALL
        try:
            return AttendanceStatus.parse(v).label
        except ValueError:
            raise ValidationError("Status filter must be All, Present or Absent")

    @classmethod
    def from_args(cls, args) -> "Filters":
        """Build from query parameters (name, memberNo, mobileNo, filterDate, status)."""

        return cls(
            name=(args.get("name") or "").strip(),
            member_no=(args.get("memberNo") or "").strip(),
            mobile_no=(args.get("mobileNo") or "").strip(),
            date=(args.get("filterDate") or "").strip(),
            status=cls.normalize_status(args.get("status")),
        )


@dataclass(frozen=True)
class SortConfig:
    key: SortKey = DEFAULT_SORT_KEY
    direction: SortDirection = DEFAULT_SORT_DIRECTION

    @property
    def is_default(self) -> bool:
        return self.key == DEFAULT_SORT_KEY and self.direction == DEFAULT_SORT_DIRECTION

    def toggled(self, key: SortKey) -> "SortConfig":
        """Same column flips direction; another column starts ascending."""

        if key == self.key:
            return SortConfig(key=key, direction=self.direction.flipped())
        return SortConfig(key=key, direction=SortDirection.ASC)

    @classmethod
    def from_args(cls, args) -> "SortConfig":
        key_s = (args.get("sort") or "").strip()
        dir_s = (args.get("direction") or "").strip().lower()
        try:
            key = SortKey(key_s) if key_s else DEFAULT_SORT_KEY
            direction = SortDirection(dir_s) if dir_s else (
                DEFAULT_SORT_DIRECTION if key == DEFAULT_SORT_KEY else SortDirection.ASC
            )
        except ValueError:
            raise ValidationError("Unknown sort column or direction")
        return cls(key=key, direction=direction)


@dataclass(frozen=True)
class ViewState:
    filters: Filters = field(default_factory=Filters)
    sort: SortConfig = field(default_factory=SortConfig)
    page: int = 1


@dataclass(frozen=True)
class ViewResult:
    records: List[AttendanceRecord]
    total_filtered: int
    total_pages: int
    page: int
    page_size: int
    gender: GenderSummary
    first_index: int
    last_index: int

    def to_dict(self) -> dict:
        return {
            "records": [r.to_dict() for r in self.records],
            "totalFiltered": self.total_filtered,
            "totalPages": self.total_pages,
            "page": self.page,
            "pageSize": self.page_size,
            "gender": self.gender.to_dict(),
            "showing": {"from": self.first_index, "to": self.last_index},
        }


def _contains(haystack: Optional[str], needle_lower: str) -> bool:
    return needle_lower in (haystack or "").lower()


def apply_filters(records: Sequence[AttendanceRecord], filters: Filters) -> List[AttendanceRecord]:
    result = list(records)

    if filters.name:
        needle = filters.name.lower()
        result = [
            r
            for r in result
            if _contains(r.member.first_name, needle)
            or _contains(r.member.last_name, needle)
            or _contains(r.member.middle_name, needle)
        ]
    if filters.member_no:
        needle = filters.member_no.lower()
        result = [r for r in result if _contains(r.member.smk_no, needle)]
    if filters.mobile_no:
        result = [r for r in result if filters.mobile_no in (r.member.mobile_no or "")]
    if filters.date:
        result = [r for r in result if r.date == filters.date]
    if filters.status != STATUS_FILTER_ALL:
        result = [r for r in result if r.status == filters.status]

    return result


_SORT_VALUES: Dict[SortKey, Callable[[AttendanceRecord], object]] = {
    SortKey.NAME: lambda r: f"{r.member.first_name} {r.member.last_name}",
    SortKey.MEMBER_NUMBER: lambda r: r.member.smk_no or "",
    SortKey.MOBILE_NUMBER: lambda r: r.member.mobile_no or "",
    SortKey.DATE_TIME: lambda r: r.timestamp,
    SortKey.STATUS: lambda r: r.status,
}


def sort_records(records: Sequence[AttendanceRecord], sort: SortConfig) -> List[AttendanceRecord]:
    # sorted() is stable in both directions, so ties keep their input order.
    return sorted(records, key=_SORT_VALUES[sort.key], reverse=sort.direction == SortDirection.DESC)


def summarize_gender(records: Sequence[AttendanceRecord]) -> GenderSummary:
    male = female = unknown = 0
    for r in records:
        gender = r.member.decoded_gender
        if gender is Gender.MALE:
            male += 1
        elif gender is Gender.FEMALE:
            female += 1
        else:
            unknown += 1
    return GenderSummary(male=male, female=female, unknown=unknown)


def count_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if count > 0 else 0


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(int(page), 1), max(total_pages, 1))


def compute_view(
    records: Sequence[AttendanceRecord],
    state: ViewState,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ViewResult:
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    ordered = sort_records(apply_filters(records, state.filters), state.sort)
    total = len(ordered)
    pages = count_pages(total, page_size)
    page = clamp_page(state.page, pages)

    offset = (page - 1) * page_size
    visible = ordered[offset : offset + page_size]

    return ViewResult(
        records=visible,
        total_filtered=total,
        total_pages=pages,
        page=page,
        page_size=page_size,
        gender=summarize_gender(ordered),
        first_index=offset + 1 if visible else 0,
        last_index=offset + len(visible),
    )


class AttendanceView:
    """Mutable view over a record set: the table/export page's state machine."""

    def __init__(self, records: Sequence[AttendanceRecord] = (), *, page_size: int = DEFAULT_PAGE_SIZE):
        self._records: List[AttendanceRecord] = list(records)
        self._page_size = int(page_size)
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def records(self) -> List[AttendanceRecord]:
        return list(self._records)

    @property
    def has_active_filters(self) -> bool:
        return self._state.filters.is_active or not self._state.sort.is_default

    def set_records(self, records: Sequence[AttendanceRecord], *, reset: bool = True) -> None:
        self._records = list(records)
        if reset:
            self._state = ViewState()

    def set_filters(self, **changes) -> None:
        if "status" in changes:
            changes["status"] = Filters.normalize_status(changes["status"])
        self._state = replace(self._state, filters=replace(self._state.filters, **changes))

    def handle_sort(self, key: SortKey | str) -> SortConfig:
        self._state = replace(self._state, sort=self._state.sort.toggled(SortKey(key)))
        return self._state.sort

    def go_to_page(self, page: int) -> None:
        self._state = replace(self._state, page=int(page))

    def clear_filters(self) -> None:
        self._state = ViewState()

    def result(self) -> ViewResult:
        out = compute_view(self._records, self._state, page_size=self._page_size)
        if out.page != self._state.page:
            self._state = replace(self._state, page=out.page)
        return out

    def filtered_sorted(self) -> List[AttendanceRecord]:
        """Full filtered+sorted set (what the CSV export writes)."""

        return sort_records(apply_filters(self._records, self._state.filters), self._state.sort)
