"""
Stored JSON form of a RecurringDate.

Keys are camelCase; dates travel as ISO-8601 date-times at local midnight:

    {"intervalUnit": "month", "intervalLength": 1, "startDate": "2026-03-01T00:00:00",
     "baseOnCompletion": false, "weekNumber": null, "daysOfWeek": null, "month": null,
     "dayOfMonth": 15, "onWeekend": "next-weekday", "endDate": null, "maxCount": 12}
"""
from datetime import date, datetime, time
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from recurrence_engine.domain.calendar_math import start_of_day
from recurrence_engine.domain.recurring_date import IntervalUnit, RecurringDate, WeekendPolicy


class RecurrenceFormatError(ValueError):
    pass


Weekday = Annotated[int, Field(ge=0, le=6)]


class RecurrenceSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    interval_unit: IntervalUnit
    interval_length: int = Field(1, ge=1)
    start_date: datetime | None = None
    base_on_completion: bool = False
    week_number: int | None = Field(None, ge=1, le=5)
    days_of_week: list[Weekday] | None = None
    month: int | None = Field(None, ge=0, le=11)
    day_of_month: int | None = Field(None, ge=1, le=31)
    on_weekend: WeekendPolicy = WeekendPolicy.NO_CHANGE
    end_date: datetime | None = None
    max_count: int | None = Field(None, ge=0)


def _to_midnight(d: date | None) -> datetime | None:
    return datetime.combine(d, time()) if d is not None else None


def recurring_date_from_json(value: dict[str, Any] | str | bytes) -> RecurringDate:
    """Build a RecurringDate from its stored form. Raises RecurrenceFormatError."""
    try:
        if isinstance(value, (str, bytes)):
            schema = RecurrenceSchema.model_validate_json(value)
        else:
            schema = RecurrenceSchema.model_validate(value)
    except ValidationError as e:
        raise RecurrenceFormatError(f"invalid recurrence: {e}") from e

    return RecurringDate(
        interval_unit=schema.interval_unit,
        interval_length=schema.interval_length,
        start_date=start_of_day(schema.start_date) if schema.start_date else None,
        base_on_completion=schema.base_on_completion,
        week_number=schema.week_number,
        days_of_week=schema.days_of_week,
        month=schema.month,
        day_of_month=schema.day_of_month,
        on_weekend=schema.on_weekend,
        end_date=start_of_day(schema.end_date) if schema.end_date else None,
        max_count=schema.max_count,
    )


def recurring_date_to_json(rule: RecurringDate) -> dict[str, Any]:
    """Stored form of a RecurringDate. Raises RecurrenceFormatError for out-of-range fields."""
    try:
        schema = RecurrenceSchema(
            interval_unit=rule.interval_unit,
            interval_length=rule.interval_length,
            start_date=_to_midnight(rule.start_date),
            base_on_completion=rule.base_on_completion,
            week_number=rule.week_number,
            days_of_week=rule.days_of_week,
            month=rule.month,
            day_of_month=rule.day_of_month,
            on_weekend=rule.on_weekend,
            end_date=_to_midnight(rule.end_date),
            max_count=rule.max_count,
        )
    except ValidationError as e:
        raise RecurrenceFormatError(f"cannot serialize recurrence: {e}") from e
    return schema.model_dump(mode="json", by_alias=True)
