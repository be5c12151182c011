from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Ravisabha
from .repository import RavisabhaRepository

_UPDATABLE = ("held_on", "prasad", "expense", "yajman", "notes")


def _from_row(r: Dict[str, Any]) -> Ravisabha:
    return Ravisabha(
        ravisabha_id=int(r["ravisabha_id"]),
        held_on=r["held_on"],
        prasad=r.get("prasad"),
        expense=r.get("expense"),
        yajman=r.get("yajman"),
        notes=r.get("notes"),
        attendance_count=int(r.get("attendance_count") or 0),
    )


class MySQLRavisabhaRepository(RavisabhaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, ravisabha_id: int) -> Optional[Ravisabha]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ravisabha_id, held_on, prasad, expense, yajman, notes
                FROM ravisabha_details
                WHERE ravisabha_id=%s
                """,
                (int(ravisabha_id),),
            )
            r = fetchone(cur)
            return _from_row(r) if r else None

    def list_range(self, *, start: date, end: date) -> Sequence[Ravisabha]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rd.ravisabha_id, rd.held_on, rd.prasad, rd.expense, rd.yajman, rd.notes,
                       COUNT(ar.attendance_id) AS attendance_count
                FROM ravisabha_details rd
                LEFT JOIN attendance_records ar ON ar.ravisabha_id = rd.ravisabha_id
                WHERE rd.held_on BETWEEN %s AND %s
                GROUP BY rd.ravisabha_id, rd.held_on, rd.prasad, rd.expense, rd.yajman, rd.notes
                ORDER BY rd.held_on DESC
                """,
                (start, end),
            )
            return [_from_row(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        held_on: date,
        prasad: Optional[str],
        expense: Optional[Decimal],
        yajman: Optional[str],
        notes: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ravisabha_details(held_on, prasad, expense, yajman, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (held_on, prasad, expense, yajman, notes),
            )
            return int(cur.lastrowid)

    def update(self, ravisabha_id: int, *, fields: dict) -> bool:
        columns = [c for c in _UPDATABLE if c in fields]
        if not columns:
            return self.get_by_id(ravisabha_id) is not None

        assignments = ", ".join(f"{c}=%s" for c in columns)
        params = tuple(fields[c] for c in columns) + (int(ravisabha_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE ravisabha_details SET {assignments} WHERE ravisabha_id=%s", params)
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM ravisabha_details WHERE ravisabha_id=%s", (int(ravisabha_id),))
            return fetchone(cur) is not None

    def delete(self, ravisabha_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM ravisabha_details WHERE ravisabha_id=%s", (int(ravisabha_id),))
            return cur.rowcount > 0
