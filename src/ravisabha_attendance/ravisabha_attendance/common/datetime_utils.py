from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.exceptions import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO timestamps ("2024-03-01T10:00:00.000Z") are accepted and truncated
    to their date part, as browsers send them.
    """
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(str(value).strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)")
    return parsed.year, parsed.month


def parse_year(value: str) -> int:
    v = str(value).strip()
    if len(v) != 4 or not v.isdigit():
        raise ValidationError(f"Invalid year: {value!r} (expected YYYY)")
    return int(v)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    last_day = calendar.monthrange(year, month)[1]
    return start_of_day(date(year, month, 1)), end_of_day(date(year, month, last_day))


def year_bounds(year: int) -> tuple[datetime, datetime]:
    return start_of_day(date(year, 1, 1)), end_of_day(date(year, 12, 31))


def months_back(day: date, months: int) -> date:
    """Same day-of-month `months` earlier, clamped to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def to_epoch_ms(date_str: str, time_str: str) -> int:
    """Epoch milliseconds of a local `YYYY-MM-DD` + `HH:MM` pair.

    This is the only date+time to epoch conversion in the code base; derived
    timestamps must come from here.
    """
    moment = datetime.strptime(f"{date_str} {time_str}", "%Y-%m-%d %H:%M")
    return int(moment.timestamp() * 1000)


def format_12_hour(time_str: str) -> str:
    """'13:05' -> '1:05 PM', '00:30' -> '12:30 AM', '' -> ''."""
    if not time_str:
        return ""
    hours_s, minutes_s = time_str.split(":")[:2]
    hours = int(hours_s)
    period = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{int(minutes_s):02d} {period}"
