"""Task service - Task gating during a visit"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import ScheduleStatus, Task, TaskStatus
from ...shared.validators import require_reason
from ..schedules.repository import ScheduleRepository
from .repository import TaskRepository
from .schemas import TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()
        self.schedules = ScheduleRepository()

    def get_tasks(self, schedule_id: int) -> list[Task]:
        if not self.schedules.schedule_exists(self.db, schedule_id):
            raise NotFoundError("Schedule not found")
        return self.repo.get_tasks_for_schedule(self.db, schedule_id)

    def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """
        Mark a task completed or not completed.

        Only allowed while the parent schedule is in progress. A reason is
        mandatory for ``not_completed`` and is checked before anything is
        read, so a blank reason is always a validation error.
        """
        status = TaskStatus(data.status)
        reason = ""
        if status == TaskStatus.NOT_COMPLETED:
            try:
                reason = require_reason(
                    data.reason, "Reason is required when marking task as not completed"
                )
            except ValueError as e:
                raise ValidationError(str(e), details={"field": "reason"})

        task = self.repo.get_task_by_id(self.db, task_id)
        if not task:
            raise NotFoundError("Task not found")

        schedule_status = task.schedule.status
        if schedule_status != ScheduleStatus.IN_PROGRESS:
            logger.warning(
                f"⚠️ Task {task_id} update rejected: schedule {task.schedule_id} is {schedule_status.value}"
            )
            if schedule_status == ScheduleStatus.UPCOMING:
                message = "Cannot update tasks before starting the visit"
            else:
                message = "Cannot update tasks after the visit has ended"
            raise ConflictError(message, details={"schedule_status": schedule_status.value})

        try:
            changed = self.repo.update_status_if_visit_active(self.db, task_id, status, reason)
            if changed != 1:
                self.db.rollback()
                raise ConflictError("Visit is no longer in progress")
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(task)
        logger.info(f"✅ Task {task_id} marked {status.value}")
        return task
