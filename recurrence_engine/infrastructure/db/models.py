"""
SQLAlchemy ORM models
"""
from datetime import date as date_type
from sqlalchemy import String, DateTime, Text, TIMESTAMP, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from recurrence_engine.domain.recurring_date import RecurringDate
from recurrence_engine.infrastructure.db.session import Base
from recurrence_engine.infrastructure.db.types import RecurrenceType


class TaskModel(Base):
    """Task row; owns its recurrence by value"""
    __tablename__ = "tasks"

    task_id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    due_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, server_default="ACTIVE")  # ACTIVE/DONE

    # None once the series has ended (or for one-off tasks)
    recurrence: Mapped[RecurringDate | None] = mapped_column(RecurrenceType, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[DateTime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
