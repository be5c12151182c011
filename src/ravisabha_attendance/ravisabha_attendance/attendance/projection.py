"""Pure mapping from stored rows to the AttendanceRecord read-model."""
from __future__ import annotations

import logging
from typing import Iterable, List

from ..common.datetime_utils import to_epoch_ms
from ..core.enums import AttendanceStatus
from ..core.exceptions import DataIntegrityError
from .model import AttendanceRecord, MemberSnapshot, StoredAttendance

logger = logging.getLogger(__name__)


def project_status(raw: str, *, strict: bool) -> str:
    """'present' -> 'Present'.

    Unknown stored values are a data fault: strict mode raises, otherwise the
    record is shown as Absent so one bad row cannot break the page.
    """
    try:
        return AttendanceStatus.parse(raw).label
    except ValueError:
        if strict:
            raise DataIntegrityError(f"Unknown attendance status {raw!r}")
        logger.warning("unknown attendance status %r, showing as Absent", raw)
        return AttendanceStatus.ABSENT.label


def project_record(stored: StoredAttendance, *, strict: bool = False) -> AttendanceRecord:
    if stored.member is None:
        raise ValueError(f"attendance {stored.attendance_id} has no resolved member")

    # timestamp is re-derived from the minute-precision date/time pair.
    date_s = stored.attended_at.strftime("%Y-%m-%d")
    time_s = stored.attended_at.strftime("%H:%M")

    return AttendanceRecord(
        id=stored.attendance_id,
        member=MemberSnapshot.of(stored.member),
        status=project_status(stored.status, strict=strict),
        date=date_s,
        time=time_s,
        timestamp=to_epoch_ms(date_s, time_s),
        session_ref=stored.ravisabha_id,
    )


def project_records(rows: Iterable[StoredAttendance], *, strict: bool = False) -> List[AttendanceRecord]:
    out: List[AttendanceRecord] = []
    for row in rows:
        if row.member is None:
            logger.debug("dropping attendance %s: member %s not found", row.attendance_id, row.member_id)
            continue
        out.append(project_record(row, strict=strict))
    return out
