from datetime import date, datetime

import pytest

from src.ravisabha_attendance.ravisabha_attendance.attendance.model import StoredAttendance
from src.ravisabha_attendance.ravisabha_attendance.attendance.scope import Scope
from src.ravisabha_attendance.ravisabha_attendance.attendance.service import AttendanceService
from src.ravisabha_attendance.ravisabha_attendance.core.enums import AttendanceStatus
from src.ravisabha_attendance.ravisabha_attendance.core.exceptions import (
    DataIntegrityError,
    DuplicateKeyError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture()
def service(attendance_repo, members_repo):
    return AttendanceService(attendance_repo, members_repo, strict_projection=True)


def test_fetch_day_returns_newest_first(service, marked_day):
    records = service.fetch_records(Scope.for_day(marked_day))

    assert [r.member.first_name for r in records] == ["Nila", "Amit", "Sita", "Ramesh"]
    assert records[0].time == "23:59"
    assert {r.status for r in records} == {"Present", "Absent"}


def test_fetch_excludes_other_days(service, attendance_repo, marked_day):
    attendance_repo.insert(member_id=1, smk_no="SMK001", name=None, status=AttendanceStatus.PRESENT, attended_at=datetime(2024, 3, 2, 0, 0))

    assert len(service.fetch_records(Scope.for_day(marked_day))) == 4
    assert len(service.fetch_records(Scope.for_dates(marked_day, date(2024, 3, 2)))) == 5


def test_mark_defaults_to_absent(service, attendance_repo):
    attendance_id = service.mark_attendance(member_id="2", now=datetime(2024, 3, 3, 8, 0))

    assert attendance_repo.rows[attendance_id].status == "absent"


def test_mark_twice_same_day_is_a_duplicate(service):
    service.mark_attendance(member_id=1, status="Present", now=datetime(2024, 3, 3, 8, 0))

    with pytest.raises(DuplicateKeyError) as exc:
        service.mark_attendance(member_id=1, status="Present", now=datetime(2024, 3, 3, 19, 0))

    assert exc.value.status_code == 409
    assert "2024-03-03" in exc.value.message


def test_mark_links_session(service, attendance_repo):
    attendance_id = service.mark_attendance(member_id=1, status="present", session_ref="9", now=datetime(2024, 3, 3, 8, 0))

    assert attendance_repo.rows[attendance_id].ravisabha_id == 9
    assert [r.id for r in service.fetch_records(Scope.for_session(9))] == [attendance_id]


def test_mark_unknown_member(service):
    with pytest.raises(NotFoundError):
        service.mark_attendance(member_id=99, now=datetime(2024, 3, 3, 8, 0))


def test_mark_invalid_status(service):
    with pytest.raises(ValidationError):
        service.mark_attendance(member_id=1, status="late", now=datetime(2024, 3, 3, 8, 0))


def test_set_and_toggle_status(service, attendance_repo, marked_day):
    assert service.set_status(3, "Present") is AttendanceStatus.PRESENT
    assert attendance_repo.rows[3].status == "present"

    assert service.toggle_status("3", "Present") is AttendanceStatus.ABSENT
    assert attendance_repo.rows[3].status == "absent"


def test_set_status_requires_value(service, marked_day):
    with pytest.raises(ValidationError):
        service.set_status(1, "  ")


def test_set_status_unknown_record(service):
    with pytest.raises(NotFoundError):
        service.set_status(42, "present")


def test_delete_record(service, attendance_repo, marked_day):
    service.delete_record("2")

    assert 2 not in attendance_repo.rows
    with pytest.raises(NotFoundError):
        service.delete_record(2)
    with pytest.raises(InvalidIdentifierError):
        service.delete_record("not-an-id")


def test_gender_counts_use_decode_table(service, marked_day):
    summary = service.gender_counts(Scope.for_day(marked_day))

    assert (summary.male, summary.female, summary.unknown) == (1, 2, 1)
    assert summary.total == 4


def test_strict_projection_surfaces_bad_rows(service, attendance_repo, members_repo):
    attendance_repo.add_raw(
        StoredAttendance(
            attendance_id=50,
            member_id=1,
            smk_no="SMK001",
            status="late",
            attended_at=datetime(2024, 4, 1, 9, 0),
            attendance_date=date(2024, 4, 1),
        )
    )

    with pytest.raises(DataIntegrityError):
        service.fetch_records(Scope.for_day(date(2024, 4, 1)))

    lenient = AttendanceService(attendance_repo, members_repo)
    assert lenient.fetch_records(Scope.for_day(date(2024, 4, 1)))[0].status == "Absent"
