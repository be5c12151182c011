from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository
from ..common.validators import parse_identifier
from ..core.exceptions import MemberInUseError, NotFoundError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: member lookups and guarded removal."""

    def __init__(self, members: MemberRepository, attendance: AttendanceRepository):
        self._members = members
        self._attendance = attendance

    def get_member(self, member_id) -> Member:
        member = self._members.get_by_id(parse_identifier(member_id, "member id"))
        if not member:
            raise NotFoundError("Member not found")
        return member

    def delete_member(self, member_id) -> None:
        member = self.get_member(member_id)

        references = self._attendance.count_referencing(member.member_id)
        if references > 0:
            raise MemberInUseError(
                f"Cannot delete member. This member has {references} attendance record(s). "
                "Please delete attendance records first."
            )

        if not self._members.delete_by_id(member.member_id):
            raise NotFoundError("Member not found")
        logger.info("member %s deleted", member.member_id)
