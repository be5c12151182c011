from datetime import date, datetime

import pytest

from src.ravisabha_attendance.ravisabha_attendance.attendance.model import StoredAttendance
from src.ravisabha_attendance.ravisabha_attendance.attendance.projection import (
    project_record,
    project_records,
    project_status,
)
from src.ravisabha_attendance.ravisabha_attendance.common.datetime_utils import to_epoch_ms
from src.ravisabha_attendance.ravisabha_attendance.core.exceptions import DataIntegrityError
from src.ravisabha_attendance.ravisabha_attendance.members.model import Member

MEMBER = Member(member_id=5, smk_no="SMK005", first_name="Kiran", last_name="Mehta", mobile_no="9000000005", gender=2)


def _stored(attendance_id=1, *, status="present", at=datetime(2024, 3, 1, 9, 5, 42), member=MEMBER):
    return StoredAttendance(
        attendance_id=attendance_id,
        member_id=5,
        smk_no="SMK005",
        status=status,
        attended_at=at,
        attendance_date=at.date(),
        member=member,
    )


def test_status_is_capitalized():
    assert project_status("present", strict=True) == "Present"
    assert project_status("ABSENT", strict=True) == "Absent"


def test_unknown_status_raises_in_strict_mode():
    with pytest.raises(DataIntegrityError):
        project_status("late", strict=True)


def test_unknown_status_shows_absent_when_lenient(caplog):
    assert project_status("late", strict=False) == "Absent"
    assert "unknown attendance status" in caplog.text


def test_timestamp_is_derived_from_date_and_time():
    record = project_record(_stored())

    assert record.date == "2024-03-01"
    assert record.time == "09:05"
    assert record.timestamp == to_epoch_ms("2024-03-01", "09:05")
    assert record.timestamp == int(datetime(2024, 3, 1, 9, 5).timestamp() * 1000)


def test_member_is_snapshotted():
    record = project_record(_stored())

    assert record.member.first_name == "Kiran"
    assert record.member.decoded_gender.value == "female"
    assert record.to_dict()["user"]["smkNo"] == "SMK005"


def test_dangling_member_rows_are_dropped():
    rows = [_stored(1), _stored(2, member=None), _stored(3, at=datetime(2024, 3, 2, 8, 0))]

    records = project_records(rows, strict=True)

    assert [r.id for r in records] == [1, 3]
    assert records[1].date == date(2024, 3, 2).isoformat()
