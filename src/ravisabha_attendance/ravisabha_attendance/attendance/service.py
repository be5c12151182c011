from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..common.validators import parse_identifier
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .model import AttendanceRecord, GenderSummary
from .projection import project_records
from .repository import AttendanceRepository
from .scope import Scope

logger = logging.getLogger(__name__)


class AttendanceService:
    """Query gateway and write use cases for attendance records."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        strict_projection: bool = False,
    ):
        self._attendance = attendance
        self._members = members
        self._strict = bool(strict_projection)

    @staticmethod
    def _parse_status(value) -> AttendanceStatus:
        if value is None or str(value).strip() == "":
            return AttendanceStatus.ABSENT
        try:
            return AttendanceStatus.parse(value)
        except ValueError:
            raise ValidationError("Status must be Present or Absent")

    def fetch_records(self, scope: Scope) -> List[AttendanceRecord]:
        rows = self._attendance.find_by_scope(scope)
        records = project_records(rows, strict=self._strict)
        logger.debug("scope %s: %d rows, %d projected", scope.tag, len(rows), len(records))
        return records

    def gender_counts(self, scope: Scope) -> GenderSummary:
        return GenderSummary.from_codes(self._attendance.aggregate_gender_counts(scope))

    def mark_attendance(
        self,
        *,
        member_id,
        status=None,
        session_ref=None,
        now: Optional[datetime] = None,
    ) -> int:
        """Record one attendance row for a member at `now` (default: current local time).

        Raises DuplicateKeyError when the member is already marked for that day.
        """
        member_pk = parse_identifier(member_id, "member id")
        ravisabha_id = None
        if session_ref is not None and str(session_ref).strip() != "":
            ravisabha_id = parse_identifier(session_ref, "ravisabhaId")
        parsed = self._parse_status(status)

        member = self._members.get_by_id(member_pk)
        if not member:
            raise NotFoundError("Member not found")

        now = now or now_local()
        try:
            attendance_id = self._attendance.insert(
                member_id=member.member_id,
                smk_no=member.smk_no,
                name=member.display_name,
                status=parsed,
                attended_at=now,
                ravisabha_id=ravisabha_id,
            )
        except DuplicateKeyError:
            logger.warning("duplicate attendance for member %s on %s", member.member_id, now.date())
            raise DuplicateKeyError(f"Attendance already marked for {member.display_name} on {now.date().isoformat()}")

        logger.info("attendance %s marked %s for member %s", attendance_id, parsed.value, member.member_id)
        return attendance_id

    def set_status(self, record_id, status) -> AttendanceStatus:
        attendance_id = parse_identifier(record_id, "attendance id")
        if status is None or str(status).strip() == "":
            raise ValidationError("Status is required")
        parsed = self._parse_status(status)
        if not self._attendance.update_status(attendance_id, parsed):
            raise NotFoundError()
        logger.info("attendance %s set to %s", attendance_id, parsed.value)
        return parsed

    def toggle_status(self, record_id, current) -> AttendanceStatus:
        flipped = (
            AttendanceStatus.ABSENT
            if self._parse_status(current) is AttendanceStatus.PRESENT
            else AttendanceStatus.PRESENT
        )
        return self.set_status(record_id, flipped.value)

    def delete_record(self, record_id) -> None:
        attendance_id = parse_identifier(record_id, "attendance id")
        if not self._attendance.delete_by_id(attendance_id):
            raise NotFoundError()
        logger.info("attendance %s deleted", attendance_id)
