from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..members.mysql_member_repository import MEMBER_COLUMNS, member_from_row
from .model import StoredAttendance
from .repository import AttendanceRepository
from .scope import Scope


def _scope_clause(scope: Scope) -> tuple[str, tuple]:
    if scope.is_session:
        return "ar.ravisabha_id=%s", (int(scope.session_ref),)
    return "ar.attended_at BETWEEN %s AND %s", (scope.start, scope.end)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(member_id, ravisabha_id, smk_no, name, status, attended_at, attendance_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(member_id), ravisabha_id, smk_no, name, status.value, attended_at, attended_at.date()),
            )
            return int(cur.lastrowid)

    def find_by_scope(self, scope: Scope) -> Sequence[StoredAttendance]:
        where, params = _scope_clause(scope)

        with db_cursor(self._conn_factory) as (_, cur):
            # LEFT JOIN keeps dangling references visible; the projection drops them.
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, ar.member_id AS ar_member_id, ar.ravisabha_id, ar.smk_no AS ar_smk_no,
                    ar.name, ar.status, ar.attended_at, ar.attendance_date,
                    {MEMBER_COLUMNS}
                FROM attendance_records ar
                LEFT JOIN members m ON m.member_id = ar.member_id
                WHERE {where}
                ORDER BY ar.attended_at DESC
                """,
                params,
            )
            rows = fetchall(cur)

            return [
                StoredAttendance(
                    attendance_id=int(r["attendance_id"]),
                    member_id=int(r["ar_member_id"]),
                    ravisabha_id=int(r["ravisabha_id"]) if r.get("ravisabha_id") is not None else None,
                    smk_no=r["ar_smk_no"],
                    name=r.get("name"),
                    status=r["status"],
                    attended_at=r["attended_at"],
                    attendance_date=r["attendance_date"],
                    member=member_from_row(r) if r.get("member_id") is not None else None,
                )
                for r in rows
            ]

    def update_status(self, attendance_id: int, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s WHERE attendance_id=%s",
                (status.value, int(attendance_id)),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when the value did not change.
            cur.execute("SELECT 1 AS found FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def aggregate_gender_counts(self, scope: Scope) -> dict:
        where, params = _scope_clause(scope)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT m.gender AS gender, COUNT(*) AS count
                FROM attendance_records ar
                JOIN members m ON m.member_id = ar.member_id
                WHERE {where}
                GROUP BY m.gender
                """,
                params,
            )
            return {r.get("gender"): int(r["count"]) for r in fetchall(cur)}

    def count_referencing(self, member_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records WHERE member_id=%s", (int(member_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
