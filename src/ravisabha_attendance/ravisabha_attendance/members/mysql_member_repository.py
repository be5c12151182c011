from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Member
from .repository import MemberRepository

MEMBER_COLUMNS = """
    m.member_id, m.bhakt_id, m.smk_no, m.first_name, m.middle_name, m.last_name,
    m.first_name_guj, m.middle_name_guj, m.last_name_guj,
    m.gender, m.age, m.mobile_no, m.present_village
"""


def member_from_row(r: Dict[str, Any]) -> Member:
    """Build a Member from a row selected with MEMBER_COLUMNS."""

    return Member(
        member_id=int(r["member_id"]),
        bhakt_id=int(r["bhakt_id"]) if r.get("bhakt_id") is not None else None,
        smk_no=r["smk_no"],
        first_name=r["first_name"],
        middle_name=r.get("middle_name") or "",
        last_name=r["last_name"],
        first_name_guj=r.get("first_name_guj") or "",
        middle_name_guj=r.get("middle_name_guj") or "",
        last_name_guj=r.get("last_name_guj") or "",
        gender=r.get("gender"),
        age=int(r["age"]) if r.get("age") is not None else None,
        mobile_no=str(r.get("mobile_no") or ""),
        present_village=r.get("present_village") or "",
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {MEMBER_COLUMNS} FROM members m WHERE m.member_id=%s", (int(member_id),))
            row = fetchone(cur)
            return member_from_row(row) if row else None

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (int(member_id),))
            return cur.rowcount > 0
