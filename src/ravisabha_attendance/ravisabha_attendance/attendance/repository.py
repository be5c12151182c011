from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import StoredAttendance
from .scope import Scope


class AttendanceRepository(Protocol):
    """Store contract for attendance rows.

    Implementations raise DuplicateKeyError when a member is marked twice on
    the same local day and StoreUnavailableError for any store failure.
    """

    def insert(
        self,
        *,
        member_id: int,
        smk_no: str,
        name: Optional[str],
        status: AttendanceStatus,
        attended_at: datetime,
        ravisabha_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def find_by_scope(self, scope: Scope) -> Sequence[StoredAttendance]:
        """Matching rows joined with the current member, newest first."""

        raise NotImplementedError

    def update_status(self, attendance_id: int, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def aggregate_gender_counts(self, scope: Scope) -> dict:
        """Return `{raw gender code: count}` for rows whose member resolves."""

        raise NotImplementedError

    def count_referencing(self, member_id: int) -> int:
        raise NotImplementedError
