from datetime import datetime

import pytest

from src.ravisabha_attendance.ravisabha_attendance.core.enums import AttendanceStatus
from src.ravisabha_attendance.ravisabha_attendance.core.exceptions import MemberInUseError, NotFoundError
from src.ravisabha_attendance.ravisabha_attendance.members.service import MemberService


def test_delete_member_without_attendance(members_repo, attendance_repo):
    service = MemberService(members_repo, attendance_repo)

    service.delete_member("4")

    assert members_repo.get_by_id(4) is None


def test_delete_member_blocked_by_attendance(members_repo, attendance_repo):
    attendance_repo.insert(member_id=1, smk_no="SMK001", name=None, status=AttendanceStatus.PRESENT, attended_at=datetime(2024, 3, 1, 9, 0))
    service = MemberService(members_repo, attendance_repo)

    with pytest.raises(MemberInUseError) as exc:
        service.delete_member(1)

    assert exc.value.status_code == 409
    assert "1 attendance record(s)" in exc.value.message
    assert members_repo.get_by_id(1) is not None


def test_delete_unknown_member(members_repo, attendance_repo):
    with pytest.raises(NotFoundError):
        MemberService(members_repo, attendance_repo).delete_member(77)


def test_member_display_name_and_gender(members_repo):
    member = members_repo.get_by_id(3)

    assert member.display_name == "Amit Desai"
    assert member.decoded_gender.label == "Female"
