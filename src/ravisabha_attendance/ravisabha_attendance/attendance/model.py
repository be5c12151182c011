from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import Gender
from ..members.model import Member


@dataclass(frozen=True)
class StoredAttendance:
    """Raw store row, joined with the member as it is *now* (None if dangling)."""

    attendance_id: int
    member_id: int
    smk_no: str
    status: str
    attended_at: datetime
    attendance_date: date
    ravisabha_id: Optional[int] = None
    name: Optional[str] = None
    member: Optional[Member] = None


@dataclass(frozen=True)
class MemberSnapshot:
    """Point-in-time copy of the attendee taken at projection time."""

    member_id: int
    first_name: str
    last_name: str
    smk_no: str
    mobile_no: str
    middle_name: str = ""
    gender: Optional[Union[int, str]] = None
    first_name_guj: str = ""
    middle_name_guj: str = ""
    last_name_guj: str = ""
    age: Optional[int] = None
    present_village: str = ""

    @classmethod
    def of(cls, member: Member) -> "MemberSnapshot":
        return cls(
            member_id=member.member_id,
            first_name=member.first_name,
            middle_name=member.middle_name,
            last_name=member.last_name,
            smk_no=member.smk_no,
            mobile_no=member.mobile_no,
            gender=member.gender,
            first_name_guj=member.first_name_guj,
            middle_name_guj=member.middle_name_guj,
            last_name_guj=member.last_name_guj,
            age=member.age,
            present_village=member.present_village,
        )

    @property
    def decoded_gender(self) -> Gender:
        return Gender.decode(self.gender)


@dataclass(frozen=True)
class AttendanceRecord:
    """Read-model consumed by the view engine, table renderer and CSV export.

    `status` is the display form ("Present"/"Absent"); `timestamp` is always
    `to_epoch_ms(date, time)` and is only produced by the projection.
    """

    id: int
    member: MemberSnapshot
    status: str
    date: str
    time: str
    timestamp: int
    session_ref: Optional[int] = None

    def to_dict(self) -> dict:
        m = self.member
        return {
            "id": self.id,
            "user": {
                "id": m.member_id,
                "firstName": m.first_name,
                "middleName": m.middle_name,
                "lastName": m.last_name,
                "smkNo": m.smk_no,
                "mobileNo": m.mobile_no,
                "gender": None if m.gender is None else str(m.gender),
                "firstNameGuj": m.first_name_guj,
                "middleNameGuj": m.middle_name_guj,
                "lastNameGuj": m.last_name_guj,
            },
            "status": self.status,
            "date": self.date,
            "time": self.time,
            "timestamp": self.timestamp,
            "ravisabhaId": self.session_ref,
        }


@dataclass(frozen=True)
class GenderSummary:
    male: int = 0
    female: int = 0
    unknown: int = 0

    @property
    def total(self) -> int:
        return self.male + self.female + self.unknown

    @classmethod
    def from_codes(cls, counts: dict) -> "GenderSummary":
        """Fold `{raw gender code: count}` through the Gender decode table."""

        male = female = unknown = 0
        for raw, count in counts.items():
            gender = Gender.decode(raw)
            if gender is Gender.MALE:
                male += int(count)
            elif gender is Gender.FEMALE:
                female += int(count)
            else:
                unknown += int(count)
        return cls(male=male, female=female, unknown=unknown)

    def to_dict(self) -> dict:
        return {"male": self.male, "female": self.female, "unknown": self.unknown, "total": self.total}
