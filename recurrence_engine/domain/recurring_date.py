"""
Recurring date: the repeat schedule attached to a task.

Computes the next occurrence of a schedule relative to a reference date.
Uses date only (no time of day).

Units:
- DAY:   every N days
- WEEK:  every N weeks, optionally on specific weekdays
- MONTH: every N months, optionally on a day of month or on the Nth weekday
- YEAR:  every N years, optionally on a specific month + day

Pipeline of next_occurrence():
  max_count guard -> per-unit calculator -> weekend policy -> end_date check
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from recurrence_engine.domain.calendar_math import (
    MONDAY, SATURDAY, WEEKEND,
    add_days, add_months, add_years, clamp_day_of_month,
    first_weekday_on_or_after, js_weekday, next_day_of_year,
    next_nth_weekday_of_month, start_of_day, today,
)

logger = logging.getLogger(__name__)


class IntervalUnit(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class WeekendPolicy(str, Enum):
    NO_CHANGE = "no-change"
    PREVIOUS_WEEKDAY = "previous-weekday"
    NEXT_WEEKDAY = "next-weekday"
    NEAREST_WEEKDAY = "nearest-weekday"


def _coerce(enum_cls, value):
    # Unknown values are kept as given; the engine treats them as a no-op.
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass
class RecurringDate:
    interval_unit: IntervalUnit
    interval_length: int = 1
    start_date: date | None = None
    base_on_completion: bool = False
    week_number: int | None = None  # 1..5, 5 = last; MONTH + days_of_week only
    days_of_week: list[int] | None = None  # 0=Sunday..6=Saturday
    month: int | None = None  # 0..11, YEAR only
    day_of_month: int | None = None  # 1..31
    on_weekend: WeekendPolicy = WeekendPolicy.NO_CHANGE
    end_date: date | None = None
    max_count: int | None = None  # remaining repetitions

    def __post_init__(self):
        self.interval_unit = _coerce(IntervalUnit, self.interval_unit)
        self.on_weekend = _coerce(WeekendPolicy, self.on_weekend)
        self.interval_length = self.interval_length or 1
        self.week_number = self.week_number or None
        self.day_of_month = self.day_of_month or None
        if self.days_of_week is not None:
            self.days_of_week = list(self.days_of_week)
        if self.start_date is not None:
            self.start_date = start_of_day(self.start_date)
        if self.end_date is not None:
            self.end_date = start_of_day(self.end_date)

    # --- Occurrences ---

    def next_occurrence(self, reference: date | datetime | None = None) -> date | None:
        """
        Next date on which the recurrence falls after `reference` (default: today).

        Returns None once the recurrence has ended, either because max_count
        reached 0 or because the next date would fall after end_date.
        """
        if self.max_count is not None and self.max_count < 1:
            return None

        reference = start_of_day(reference if reference is not None else today())
        start = self._lower_bound(reference)

        calculator = _CALCULATORS.get(self.interval_unit)
        if calculator is None:
            logger.warning("Unknown interval unit %r, keeping reference date %s",
                           self.interval_unit, reference)
            result = reference
        else:
            result = calculator(self, reference, start)

        result = self._adjust_for_weekend(result)

        if self.end_date is not None and result > self.end_date:
            return None
        return result

    def advance(self) -> None:
        """Consume one occurrence: decrement the remaining count, if any."""
        if self.max_count is not None and self.max_count > 0:
            self.max_count -= 1

    def is_default(self) -> bool:
        """True if every option matches a recurrence built from the unit alone."""
        return self == RecurringDate(self.interval_unit)

    def _lower_bound(self, reference: date) -> date:
        start = add_days(reference, 1)
        if self.start_date is not None and self.start_date > start:
            start = self.start_date

        # Keep a weekend shift from pulling the result back before the bound.
        weekday = js_weekday(start)
        if self.on_weekend == WeekendPolicy.PREVIOUS_WEEKDAY and weekday in WEEKEND:
            start = first_weekday_on_or_after(start, [MONDAY])
        elif self.on_weekend == WeekendPolicy.NEAREST_WEEKDAY and weekday == SATURDAY:
            start = add_days(start, 1)
        return start

    def _adjust_for_weekend(self, result: date) -> date:
        weekday = js_weekday(result)
        if weekday not in WEEKEND:
            return result

        if self.on_weekend == WeekendPolicy.PREVIOUS_WEEKDAY:
            return add_days(result, -1 if weekday == SATURDAY else -2)
        if self.on_weekend == WeekendPolicy.NEXT_WEEKDAY:
            return first_weekday_on_or_after(result, [MONDAY])
        if self.on_weekend == WeekendPolicy.NEAREST_WEEKDAY:
            return add_days(result, -1 if weekday == SATURDAY else 1)
        return result

    # --- Text ---

    def to_string(self) -> str:
        from recurrence_engine.domain.recurrence_text import describe
        return describe(self)

    def to_string_verbose(self, date_format: str | None = None) -> str:
        from recurrence_engine.domain.recurrence_text import describe_verbose
        return describe_verbose(self, date_format)

    def __str__(self) -> str:
        return self.to_string()

    # --- Serialization ---

    @classmethod
    def from_json(cls, value: dict | str | bytes) -> "RecurringDate":
        from recurrence_engine.schemas import recurring_date_from_json
        return recurring_date_from_json(value)

    def to_json(self) -> dict:
        from recurrence_engine.schemas import recurring_date_to_json
        return recurring_date_to_json(self)


# --- Per-unit calculators: (rule, reference, lower bound) -> candidate ---

def _daily(rule: RecurringDate, reference: date, start: date) -> date:
    result = add_days(reference, rule.interval_length)
    return max(result, start)


def _next_listed_weekday(reference: date, days: list[int], interval: int) -> date:
    current = js_weekday(reference)
    later = [d for d in days if d > current]
    if later:
        return add_days(reference, min(later) - current)
    # Nothing left this week: skip to the Sunday that opens the next active week.
    sunday = reference + timedelta(days=7 - current, weeks=interval - 1)
    return first_weekday_on_or_after(sunday, days)


def _weekly(rule: RecurringDate, reference: date, start: date) -> date:
    if rule.days_of_week:
        result = _next_listed_weekday(reference, rule.days_of_week, rule.interval_length)
        if result < start:
            result = first_weekday_on_or_after(start, rule.days_of_week)
        return result

    result = reference + timedelta(weeks=rule.interval_length)
    if result < start:
        result = first_weekday_on_or_after(start, [js_weekday(reference)])
    return result


def _day_in_month(rule: RecurringDate, month_start: date, reference: date) -> date:
    if rule.day_of_month:
        return clamp_day_of_month(month_start, rule.day_of_month)
    weekday = rule.days_of_week[0] if rule.days_of_week else js_weekday(reference)
    return next_nth_weekday_of_month(month_start, rule.week_number, weekday)


def _resolve_in_month(rule: RecurringDate, anchor: date, reference: date) -> date:
    """First matching day on or after anchor, looking at anchor's month then the next."""
    month_start = anchor.replace(day=1)
    candidate = _day_in_month(rule, month_start, reference)
    if candidate < anchor:
        candidate = _day_in_month(rule, add_months(month_start, 1), reference)
    return candidate


def _monthly(rule: RecurringDate, reference: date, start: date) -> date:
    if rule.day_of_month or rule.week_number:
        anchor = add_days(add_months(reference, rule.interval_length), -14)
        result = _resolve_in_month(rule, anchor, reference)
        if result < start:
            result = _resolve_in_month(rule, start, reference)
        return result

    result = add_months(reference, rule.interval_length)
    if result < start:
        result = clamp_day_of_month(start.replace(day=1), reference.day)
        if result < start:
            result = clamp_day_of_month(add_months(start.replace(day=1), 1), reference.day)
    return result


def _yearly(rule: RecurringDate, reference: date, start: date) -> date:
    if rule.month is not None:
        month = rule.month + 1
        day = rule.day_of_month or 1
        anchor = add_months(add_years(reference, rule.interval_length), -6)
        result = next_day_of_year(anchor, month, day)
        if result < start:
            result = next_day_of_year(start, month, day)
        return result

    result = add_years(reference, rule.interval_length)
    if result < start:
        result = next_day_of_year(start, reference.month, reference.day)
    return result


_CALCULATORS = {
    IntervalUnit.DAY: _daily,
    IntervalUnit.WEEK: _weekly,
    IntervalUnit.MONTH: _monthly,
    IntervalUnit.YEAR: _yearly,
}
