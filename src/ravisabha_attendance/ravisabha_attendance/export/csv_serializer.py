from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_12_hour
from ..core.constants import CSV_DEFAULT_FILENAME, CSV_EXTENDED_HEADERS, CSV_HEADERS


def csv_headers(*, extended: bool = False) -> List[str]:
    return CSV_HEADERS + CSV_EXTENDED_HEADERS if extended else list(CSV_HEADERS)


def csv_row(record: AttendanceRecord, *, extended: bool = False) -> List[str]:
    m = record.member
    row = [
        m.first_name or "",
        m.middle_name or "",
        m.last_name or "",
        m.smk_no or "",
        m.mobile_no or "",
        record.status or "",
        m.decoded_gender.label,
        record.date or "",
        format_12_hour(record.time),
    ]
    if extended:
        row += [
            m.first_name_guj or "",
            m.middle_name_guj or "",
            m.last_name_guj or "",
            "" if m.age is None else str(m.age),
            m.present_village or "",
        ]
    return row


def serialize_csv(records: Iterable[AttendanceRecord], *, extended: bool = False) -> str:
    """Render records (in the given order) as CSV text with a header row.

    Quoting is RFC-4180 minimal: only cells containing a comma, a double quote
    or a line break are quoted, with inner quotes doubled.
    """
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(csv_headers(extended=extended))
    for record in records:
        writer.writerow(csv_row(record, extended=extended))
    return out.getvalue()


def csv_filename(start: Optional[date] = None, end: Optional[date] = None) -> str:
    if start is None or end is None:
        return CSV_DEFAULT_FILENAME
    return f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
