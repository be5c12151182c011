from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Gender


@dataclass(frozen=True)
class Member:
    """Domain entity: member directory entry (SMK detail).

    `gender` keeps the raw stored code; use `decoded_gender` to interpret it.
    """

    member_id: int
    smk_no: str
    first_name: str
    last_name: str
    middle_name: str = ""
    mobile_no: str = ""
    gender: Optional[Union[int, str]] = None
    bhakt_id: Optional[int] = None
    first_name_guj: str = ""
    middle_name_guj: str = ""
    last_name_guj: str = ""
    age: Optional[int] = None
    present_village: str = ""

    @property
    def decoded_gender(self) -> Gender:
        return Gender.decode(self.gender)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
