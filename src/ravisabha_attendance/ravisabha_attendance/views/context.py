from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.scope import Scope
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import AttendanceStatus
from .engine import AttendanceView

logger = logging.getLogger(__name__)

Fetcher = Callable[[Scope], Sequence[AttendanceRecord]]


@dataclass(frozen=True)
class FetchTicket:
    """Tag for one in-flight fetch; only the newest requested scope may apply."""

    seq: int
    scope: Scope


class AttendanceContext:
    """Explicit holder of the loaded record set, passed to views.

    Records are (re)fetched only when the scope changes; changing scope resets
    the view state. Responses are applied only when their ticket is still the
    latest requested one, so a slow answer for an old scope can never overwrite
    newer state (last requested scope wins, not last to respond).
    """

    def __init__(self, fetch: Fetcher, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._fetch = fetch
        self._scope: Optional[Scope] = None
        self._latest: Optional[FetchTicket] = None
        self._seq = itertools.count(1)
        self.view = AttendanceView(page_size=page_size)

    @property
    def scope(self) -> Optional[Scope]:
        return self._scope

    @property
    def records(self) -> List[AttendanceRecord]:
        return self.view.records

    def begin_request(self, scope: Scope) -> FetchTicket:
        ticket = FetchTicket(seq=next(self._seq), scope=scope)
        self._latest = ticket
        return ticket

    def complete_request(self, ticket: FetchTicket, records: Sequence[AttendanceRecord]) -> bool:
        if self._latest is None or ticket.seq != self._latest.seq or ticket.scope.tag != self._latest.scope.tag:
            logger.debug("discarding stale response for %s", ticket.scope.tag)
            return False

        scope_changed = self._scope is None or self._scope.tag != ticket.scope.tag
        self._scope = ticket.scope
        self.view.set_records(records, reset=scope_changed)
        return True

    def set_scope(self, scope: Scope, *, force: bool = False) -> bool:
        """Fetch synchronously if `scope` differs from the current one; True if fetched."""

        if not force and self._scope is not None and self._scope.tag == scope.tag:
            return False
        ticket = self.begin_request(scope)
        return self.complete_request(ticket, self._fetch(scope))

    def refresh(self) -> bool:
        if self._scope is None:
            return False
        ticket = self.begin_request(self._scope)
        return self.complete_request(ticket, self._fetch(self._scope))

    def add_record(self, record: AttendanceRecord) -> None:
        self.view.set_records([record] + self.view.records, reset=False)

    def update_status(self, record_id: int, status: AttendanceStatus | str) -> None:
        label = AttendanceStatus.parse(status).label
        self.view.set_records(
            [replace(r, status=label) if r.id == record_id else r for r in self.view.records],
            reset=False,
        )

    def remove_record(self, record_id: int) -> None:
        self.view.set_records([r for r in self.view.records if r.id != record_id], reset=False)
