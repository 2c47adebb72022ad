"""Human-readable summaries of a RecurringDate (fixed English wording)"""
from datetime import date

from recurrence_engine.config import get_settings
from recurrence_engine.domain.recurring_date import IntervalUnit, RecurringDate, WeekendPolicy

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKEND_NOTES = {
    WeekendPolicy.PREVIOUS_WEEKDAY: "previous weekday",
    WeekendPolicy.NEXT_WEEKDAY: "next weekday",
    WeekendPolicy.NEAREST_WEEKDAY: "nearest weekday",
}


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'"""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _every(length: int, single: str, unit: str) -> str:
    return single if length == 1 else f"Every {length} {unit}"


def describe(rule: RecurringDate) -> str:
    """Short summary, e.g. 'Every 2 weeks on Monday, Wednesday'."""
    length = rule.interval_length
    unit = rule.interval_unit

    if unit == IntervalUnit.DAY:
        return _every(length, "Daily", "days")

    if unit == IntervalUnit.WEEK:
        text = _every(length, "Weekly", "weeks")
        if rule.days_of_week:
            if len(set(rule.days_of_week)) == 7:
                text += " on all days"
            else:
                text += " on " + ", ".join(WEEKDAY_NAMES[d] for d in rule.days_of_week)
        return text

    if unit == IntervalUnit.MONTH:
        text = _every(length, "Monthly", "months")
        if rule.day_of_month:
            text += f" on the {ordinal(rule.day_of_month)}"
        elif rule.week_number and rule.days_of_week and len(rule.days_of_week) == 1:
            week = ordinal(rule.week_number) if rule.week_number < 5 else "last"
            text += f" on the {week} {WEEKDAY_NAMES[rule.days_of_week[0]]}"
        return text

    if unit == IntervalUnit.YEAR:
        text = _every(length, "Annually", "years")
        if rule.month is not None and rule.day_of_month:
            text += f" on {MONTH_NAMES[rule.month]} {ordinal(rule.day_of_month)}"
        return text

    return ""


def _format_date(d: date, date_format: str) -> str:
    return d.strftime(date_format)


def describe_verbose(rule: RecurringDate, date_format: str | None = None) -> str:
    """
    Full summary: the short form followed by bounds, remaining count,
    completion basis and weekend handling, e.g.
    'Monthly on the 3rd, from 01/03/2026, 5 times, next weekday'.
    """
    date_format = date_format or get_settings().DATE_FORMAT
    parts = [describe(rule)]

    if rule.start_date:
        parts.append(f"from {_format_date(rule.start_date, date_format)}")

    if rule.end_date:
        parts.append(f"until {_format_date(rule.end_date, date_format)}")
    elif rule.max_count:
        parts.append("1 time" if rule.max_count == 1 else f"{rule.max_count} times")

    if rule.base_on_completion:
        parts.append("based on completion date")

    note = WEEKEND_NOTES.get(rule.on_weekend)
    if note:
        parts.append(note)

    return ", ".join(parts)
