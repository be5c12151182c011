from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_PAGE_SIZE
from .database.connection import DatabaseConnection, DBConfig
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .ravisabha.mysql_ravisabha_repository import MySQLRavisabhaRepository
from .ravisabha.repository import RavisabhaRepository
from .ravisabha.service import RavisabhaService


@dataclass(frozen=True)
class AppSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    extended_csv_export: bool = False
    strict_projection: bool = False

    @classmethod
    def from_module(cls, settings) -> "AppSettings":
        return cls(
            page_size=int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE)),
            extended_csv_export=bool(getattr(settings, "EXTENDED_CSV_EXPORT", False)),
            strict_projection=bool(getattr(settings, "STRICT_PROJECTION", False)),
        )


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    ravisabha_repo: RavisabhaRepository

    attendance_service: AttendanceService
    member_service: MemberService
    ravisabha_service: RavisabhaService


def build_services(
    *,
    settings: AppSettings,
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    ravisabha_repo: RavisabhaRepository,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    return Container(
        settings=settings,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        ravisabha_repo=ravisabha_repo,
        attendance_service=AttendanceService(
            attendance_repo,
            members_repo,
            strict_projection=settings.strict_projection,
        ),
        member_service=MemberService(members_repo, attendance_repo),
        ravisabha_service=RavisabhaService(ravisabha_repo),
    )


def build_container(*, db_config: dict, settings: AppSettings | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        settings=settings or AppSettings(),
        members_repo=MySQLMemberRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        ravisabha_repo=MySQLRavisabhaRepository(conn),
    )
