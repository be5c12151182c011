from __future__ import annotations

from typing import Optional, Protocol

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members.

    Only the operations attendance needs; the directory itself is managed elsewhere.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError
