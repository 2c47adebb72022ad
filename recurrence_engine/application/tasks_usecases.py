"""Task use cases - tasks with an optional recurring due date"""
import logging
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from recurrence_engine.domain.calendar_math import today
from recurrence_engine.domain.recurring_date import RecurringDate
from recurrence_engine.infrastructure.db.models import TaskModel

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    pass


def _coerce_recurrence(recurrence: RecurringDate | dict | str | None) -> RecurringDate | None:
    if recurrence is None or isinstance(recurrence, RecurringDate):
        return recurrence
    return RecurringDate.from_json(recurrence)


class CreateTaskUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        title: str,
        note: str | None = None,
        due_date: date | None = None,
        recurrence: RecurringDate | dict | str | None = None,
    ) -> int:
        title = title.strip()
        if not title:
            raise TaskValidationError("Task title must not be empty")

        task = TaskModel(
            title=title,
            note=note,
            due_date=due_date,
            status="ACTIVE",
            recurrence=_coerce_recurrence(recurrence),
        )
        self.db.add(task)
        self.db.commit()
        logger.info("Created task_id=%d recurrence=%s", task.task_id, task.recurrence or "none")
        return task.task_id


class CompleteTaskUseCase:
    """
    Complete a task. A recurring task rolls forward to its next occurrence
    and stays active; once its recurrence has ended it is detached and the
    task is done.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, task_id: int, completed_on: date | None = None) -> date | None:
        """Returns the task's new due date, or None if the task is now done."""
        task = self.db.query(TaskModel).filter(TaskModel.task_id == task_id).first()
        if not task:
            raise TaskValidationError(f"Task #{task_id} not found")
        if task.status != "ACTIVE":
            raise TaskValidationError("Only an active task can be completed")

        completed_on = completed_on or today()
        recurrence = task.recurrence

        next_due = None
        if recurrence is not None:
            base = completed_on if recurrence.base_on_completion else (task.due_date or completed_on)
            next_due = recurrence.next_occurrence(base)
            if next_due is None:
                logger.info("Recurrence ended for task_id=%d (%s)", task_id, recurrence)
                task.recurrence = None
            else:
                recurrence.advance()
                flag_modified(task, "recurrence")

        if next_due is None:
            task.status = "DONE"
            task.completed_at = datetime.now(timezone.utc)
            logger.info("Task_id=%d done", task_id)
        else:
            task.due_date = next_due
            logger.info("Task_id=%d rolled forward to %s", task_id, next_due.isoformat())

        self.db.commit()
        return next_due
