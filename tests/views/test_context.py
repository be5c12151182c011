from datetime import date

from src.ravisabha_attendance.ravisabha_attendance.attendance.scope import Scope
from src.ravisabha_attendance.ravisabha_attendance.views.context import AttendanceContext


class RecordingFetcher:
    def __init__(self, by_tag):
        self.by_tag = by_tag
        self.calls = []

    def __call__(self, scope):
        self.calls.append(scope.tag)
        return self.by_tag.get(scope.tag, [])


DAY_1 = Scope.for_day(date(2024, 3, 1))
DAY_2 = Scope.for_day(date(2024, 3, 2))


def test_fetches_only_when_scope_changes(make_record):
    fetch = RecordingFetcher({DAY_1.tag: [make_record(1)], DAY_2.tag: [make_record(2, day="2024-03-02")]})
    ctx = AttendanceContext(fetch)

    assert ctx.set_scope(DAY_1)
    assert not ctx.set_scope(Scope.for_dates(date(2024, 3, 1), date(2024, 3, 1)))
    assert ctx.set_scope(DAY_2)

    assert fetch.calls == [DAY_1.tag, DAY_2.tag]
    assert [r.id for r in ctx.records] == [2]


def test_scope_change_resets_view_state(make_record):
    fetch = RecordingFetcher({DAY_1.tag: [make_record(1)], DAY_2.tag: []})
    ctx = AttendanceContext(fetch)
    ctx.set_scope(DAY_1)
    ctx.view.set_filters(name="ram")
    ctx.view.go_to_page(3)

    ctx.set_scope(DAY_2)

    assert not ctx.view.has_active_filters
    assert ctx.view.state.page == 1


def test_refresh_keeps_view_state(make_record):
    fetch = RecordingFetcher({DAY_1.tag: [make_record(1), make_record(2, first_name="Sita")]})
    ctx = AttendanceContext(fetch)
    ctx.set_scope(DAY_1)
    ctx.view.set_filters(name="sita")

    assert ctx.refresh()

    assert ctx.view.state.filters.name == "sita"
    assert [r.id for r in ctx.view.filtered_sorted()] == [2]


def test_stale_response_is_discarded(make_record):
    ctx = AttendanceContext(RecordingFetcher({}))
    old = ctx.begin_request(DAY_1)
    new = ctx.begin_request(DAY_2)

    assert ctx.complete_request(new, [make_record(2, day="2024-03-02")])
    assert not ctx.complete_request(old, [make_record(1)])

    assert ctx.scope == DAY_2
    assert [r.id for r in ctx.records] == [2]


def test_local_mutations(make_record):
    ctx = AttendanceContext(RecordingFetcher({DAY_1.tag: [make_record(1), make_record(2)]}))
    ctx.set_scope(DAY_1)

    ctx.add_record(make_record(3))
    ctx.update_status(2, "absent")
    ctx.remove_record(1)

    assert [(r.id, r.status) for r in ctx.records] == [(3, "Present"), (2, "Absent")]
