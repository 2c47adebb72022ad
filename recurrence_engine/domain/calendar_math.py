"""
Calendar arithmetic used by the recurrence engine.

Dates only (no time of day). Weekdays follow the 0=Sunday..6=Saturday
numbering of the stored recurrence format, not Python's Monday-first one.
"""
import calendar
from datetime import date, datetime, timedelta
from typing import Iterable

from recurrence_engine.config import get_settings


SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)
WEEKEND = frozenset({SATURDAY, SUNDAY})


def today() -> date:
    """Current date in the configured timezone."""
    return datetime.now(get_settings().get_tzinfo()).date()


def start_of_day(value: date | datetime) -> date:
    """Reduce a datetime to its local calendar date; plain dates pass through."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(get_settings().get_tzinfo())
        return value.date()
    return value


def js_weekday(d: date) -> int:
    return (d.weekday() + 1) % 7


def is_weekend(d: date) -> bool:
    return js_weekday(d) in WEEKEND


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_months(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, days_in_month(year, month))
    return date(year, month, day)


def add_years(d: date, n: int) -> date:
    return add_months(d, 12 * n)


def clamp_day_of_month(month_start: date, day: int) -> date:
    """Date in month_start's month with the given day, capped at the month's last day."""
    last = days_in_month(month_start.year, month_start.month)
    return month_start.replace(day=min(day, last))


def next_nth_weekday_of_month(month_start: date, week_number: int, weekday: int) -> date:
    """
    The week_number-th `weekday` of month_start's month.

    A week_number past the last such weekday (e.g. 5 in a month with four
    Fridays) resolves to the last one, so 5 reads as "last".
    """
    first = month_start.replace(day=1)
    first_match = first + timedelta(days=(weekday - js_weekday(first)) % 7)
    last_day = days_in_month(first.year, first.month)
    last_match = first_match + timedelta(weeks=(last_day - first_match.day) // 7)
    candidate = first_match + timedelta(weeks=week_number - 1)
    return min(candidate, last_match)


def next_day_of_year(d: date, month: int, day_of_month: int) -> date:
    """First month/day (clamped, month 1..12) falling on or after d."""
    candidate = clamp_day_of_month(date(d.year, month, 1), day_of_month)
    if candidate >= d:
        return candidate
    return clamp_day_of_month(date(d.year + 1, month, 1), day_of_month)


def first_weekday_on_or_after(d: date, weekdays: Iterable[int]) -> date:
    """Earliest date >= d whose weekday is one of `weekdays`."""
    current = js_weekday(d)
    return min(d + timedelta(days=(wd - current) % 7) for wd in weekdays)
