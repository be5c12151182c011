from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.ravisabha_attendance.ravisabha_attendance.attendance.model import (
    AttendanceRecord,
    MemberSnapshot,
    StoredAttendance,
)
from src.ravisabha_attendance.ravisabha_attendance.attendance.scope import Scope
from src.ravisabha_attendance.ravisabha_attendance.common.datetime_utils import to_epoch_ms
from src.ravisabha_attendance.ravisabha_attendance.core.enums import AttendanceStatus
from src.ravisabha_attendance.ravisabha_attendance.core.exceptions import DuplicateKeyError
from src.ravisabha_attendance.ravisabha_attendance.members.model import Member
from src.ravisabha_attendance.ravisabha_attendance.ravisabha.model import Ravisabha


class InMemoryMembers:
    def __init__(self, members=()):
        self.members: dict[int, Member] = {m.member_id: m for m in members}

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.members.get(member_id)

    def delete_by_id(self, member_id: int) -> bool:
        return self.members.pop(member_id, None) is not None


class InMemoryAttendance:
    """Mirrors the MySQL table: one row per member per day, member joined on read."""

    def __init__(self, members: InMemoryMembers):
        self._members = members
        self.rows: dict[int, StoredAttendance] = {}
        self._id = 0

    def insert(self, *, member_id, smk_no, name, status, attended_at, ravisabha_id=None) -> int:
        day = attended_at.date()
        if any(r.member_id == member_id and r.attendance_date == day for r in self.rows.values()):
            raise DuplicateKeyError()
        self._id += 1
        self.rows[self._id] = StoredAttendance(
            attendance_id=self._id,
            member_id=member_id,
            smk_no=smk_no,
            status=AttendanceStatus.parse(status).value,
            attended_at=attended_at,
            attendance_date=day,
            ravisabha_id=ravisabha_id,
            name=name,
        )
        return self._id

    def add_raw(self, row: StoredAttendance) -> None:
        self.rows[row.attendance_id] = row
        self._id = max(self._id, row.attendance_id)

    def _matches(self, row: StoredAttendance, scope: Scope) -> bool:
        if scope.is_session:
            return row.ravisabha_id == scope.session_ref
        return scope.start <= row.attended_at <= scope.end

    def find_by_scope(self, scope: Scope):
        found = [
            replace(r, member=self._members.get_by_id(r.member_id))
            for r in self.rows.values()
            if self._matches(r, scope)
        ]
        found.sort(key=lambda r: r.attended_at, reverse=True)
        return found

    def update_status(self, attendance_id: int, status: AttendanceStatus) -> bool:
        row = self.rows.get(attendance_id)
        if row is None:
            return False
        self.rows[attendance_id] = replace(row, status=status.value)
        return True

    def delete_by_id(self, attendance_id: int) -> bool:
        return self.rows.pop(attendance_id, None) is not None

    def aggregate_gender_counts(self, scope: Scope) -> dict:
        counts: dict = {}
        for row in self.find_by_scope(scope):
            if row.member is None:
                continue
            counts[row.member.gender] = counts.get(row.member.gender, 0) + 1
        return counts

    def count_referencing(self, member_id: int) -> int:
        return sum(1 for r in self.rows.values() if r.member_id == member_id)


class InMemoryRavisabha:
    def __init__(self, attendance: Optional[InMemoryAttendance] = None):
        self._attendance = attendance
        self.sessions: dict[int, Ravisabha] = {}
        self._id = 0

    def _with_count(self, session: Ravisabha) -> Ravisabha:
        if self._attendance is None:
            return session
        count = sum(1 for r in self._attendance.rows.values() if r.ravisabha_id == session.ravisabha_id)
        return replace(session, attendance_count=count)

    def get_by_id(self, ravisabha_id: int) -> Optional[Ravisabha]:
        found = self.sessions.get(ravisabha_id)
        return self._with_count(found) if found else None

    def list_range(self, *, start: date, end: date):
        items = [self._with_count(s) for s in self.sessions.values() if start <= s.held_on <= end]
        items.sort(key=lambda s: s.held_on, reverse=True)
        return items

    def create(self, *, held_on, prasad, expense, yajman, notes) -> int:
        if any(s.held_on == held_on for s in self.sessions.values()):
            raise DuplicateKeyError()
        self._id += 1
        self.sessions[self._id] = Ravisabha(
            ravisabha_id=self._id,
            held_on=held_on,
            prasad=prasad,
            expense=expense,
            yajman=yajman,
            notes=notes,
        )
        return self._id

    def update(self, ravisabha_id: int, *, fields: dict) -> bool:
        current = self.sessions.get(ravisabha_id)
        if current is None:
            return False
        held_on = fields.get("held_on")
        if held_on and any(s.held_on == held_on and k != ravisabha_id for k, s in self.sessions.items()):
            raise DuplicateKeyError()
        self.sessions[ravisabha_id] = replace(current, **fields)
        return True

    def delete(self, ravisabha_id: int) -> bool:
        return self.sessions.pop(ravisabha_id, None) is not None


DEMO_MEMBERS = [
    Member(member_id=1, smk_no="SMK001", first_name="Ramesh", middle_name="K", last_name="Patel", mobile_no="9876543210", gender="1"),
    Member(member_id=2, smk_no="SMK002", first_name="Sita", last_name="Shah", mobile_no="9123456780", gender="2"),
    Member(member_id=3, smk_no="smk003", first_name="Amit", last_name="Desai", mobile_no="9000011111", gender="F"),
    Member(member_id=4, smk_no="SMK004", first_name="Nila", last_name="Joshi", mobile_no="9988776655", gender=None),
]


@pytest.fixture()
def members_repo():
    return InMemoryMembers(DEMO_MEMBERS)


@pytest.fixture()
def attendance_repo(members_repo):
    return InMemoryAttendance(members_repo)


@pytest.fixture()
def ravisabha_repo(attendance_repo):
    return InMemoryRavisabha(attendance_repo)


@pytest.fixture()
def make_record():
    """Build a projected AttendanceRecord with sensible defaults."""

    def _make(
        record_id: int,
        *,
        first_name: str = "Ramesh",
        last_name: str = "Patel",
        middle_name: str = "",
        smk_no: str = "SMK001",
        mobile_no: str = "9876543210",
        gender="1",
        status: str = "Present",
        day: str = "2024-03-01",
        at: str = "10:00",
    ) -> AttendanceRecord:
        return AttendanceRecord(
            id=record_id,
            member=MemberSnapshot(
                member_id=record_id,
                first_name=first_name,
                middle_name=middle_name,
                last_name=last_name,
                smk_no=smk_no,
                mobile_no=mobile_no,
                gender=gender,
            ),
            status=status,
            date=day,
            time=at,
            timestamp=to_epoch_ms(day, at),
        )

    return _make


@pytest.fixture()
def marked_day(members_repo, attendance_repo):
    """Four members marked on 2024-03-01, one of them Absent."""

    attendance_repo.insert(member_id=1, smk_no="SMK001", name="Ramesh Patel", status=AttendanceStatus.PRESENT, attended_at=datetime(2024, 3, 1, 9, 15))
    attendance_repo.insert(member_id=2, smk_no="SMK002", name="Sita Shah", status=AttendanceStatus.PRESENT, attended_at=datetime(2024, 3, 1, 9, 30))
    attendance_repo.insert(member_id=3, smk_no="smk003", name="Amit Desai", status=AttendanceStatus.ABSENT, attended_at=datetime(2024, 3, 1, 10, 5))
    attendance_repo.insert(member_id=4, smk_no="SMK004", name="Nila Joshi", status=AttendanceStatus.PRESENT, attended_at=datetime(2024, 3, 1, 23, 59, 59))
    return date(2024, 3, 1)
