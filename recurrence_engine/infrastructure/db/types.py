"""
Custom column types
"""
from sqlalchemy import JSON
from sqlalchemy.types import TypeDecorator

from recurrence_engine.domain.recurring_date import RecurringDate


class RecurrenceType(TypeDecorator):
    """Stores a RecurringDate by value, as its JSON form"""
    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: RecurringDate | None, dialect):
        if value is None:
            return None
        return value.to_json()

    def process_result_value(self, value, dialect) -> RecurringDate | None:
        if value is None:
            return None
        return RecurringDate.from_json(value)
