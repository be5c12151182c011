from __future__ import annotations

from enum import Enum
from typing import Any


class AttendanceStatus(str, Enum):
    """Attendance status as stored (lowercase) in the database."""

    PRESENT = "present"
    ABSENT = "absent"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "AttendanceStatus":
        """Accept any case of 'present'/'absent' (stored or display form)."""

        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class Gender(str, Enum):
    """Decoded member gender.

    Decode table (the only place gender codes are interpreted):

    ==========================  =======
    raw value                   decoded
    ==========================  =======
    1, "1", "male", "m"         MALE
    2, "2", "female", "f"       FEMALE
    anything else, None         UNKNOWN
    ==========================  =======

    String tokens are matched case-insensitively after stripping whitespace.
    """

    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

    @classmethod
    def decode(cls, raw: Any) -> "Gender":
        if isinstance(raw, cls):
            return raw
        if raw is None or isinstance(raw, bool):
            return cls.UNKNOWN
        token = str(raw).strip().lower()
        return _GENDER_TOKENS.get(token, cls.UNKNOWN)

    @property
    def label(self) -> str:
        return "" if self is Gender.UNKNOWN else self.value.capitalize()


_GENDER_TOKENS = {
    "1": Gender.MALE,
    "male": Gender.MALE,
    "m": Gender.MALE,
    "2": Gender.FEMALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
}


class SortKey(str, Enum):
    NAME = "name"
    MEMBER_NUMBER = "memberNumber"
    MOBILE_NUMBER = "mobileNumber"
    DATE_TIME = "dateTime"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class RangePreset(str, Enum):
    """Date range choices offered by the export page."""

    THIS_MONTH = "this-month"
    LAST_3_MONTHS = "last-3-months"
    LAST_6_MONTHS = "last-6-months"
    CUSTOM = "custom"
