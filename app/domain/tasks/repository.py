"""Task repository - Database operations for tasks"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ...models import Schedule, ScheduleStatus, Task, TaskStatus


class TaskRepository:
    """Repository for task database operations"""

    @staticmethod
    def get_task_by_id(db: Session, task_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id).first()

    @staticmethod
    def get_tasks_for_schedule(db: Session, schedule_id: int) -> list[Task]:
        """Get tasks for a schedule in creation order"""
        return db.query(Task).filter(Task.schedule_id == schedule_id).order_by(Task.id).all()

    @staticmethod
    def update_status_if_visit_active(
        db: Session, task_id: int, status: TaskStatus, reason: str
    ) -> int:
        """
        Set a task's status only while its schedule is in progress.

        The schedule check is part of the UPDATE itself, so a visit that ends
        between the caller's read and this write leaves the task untouched.
        Returns the number of rows changed (0 or 1). Does not commit.
        """
        active_schedules = select(Schedule.id).where(
            Schedule.status == ScheduleStatus.IN_PROGRESS
        )
        result = db.execute(
            update(Task)
            .where(Task.id == task_id, Task.schedule_id.in_(active_schedules))
            .values(status=status, reason=reason, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
