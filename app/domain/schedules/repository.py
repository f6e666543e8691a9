"""Schedule repository - Database operations for schedules"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Activity, Schedule, ScheduleStatus, Task, Visit


class ScheduleRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def get_schedules(db: Session) -> list[Schedule]:
        """Get all schedules ordered by shift start"""
        return db.query(Schedule).order_by(Schedule.shift_start.asc(), Schedule.id.asc()).all()

    @staticmethod
    def get_schedules_between(db: Session, start: datetime, end: datetime) -> list[Schedule]:
        """Get schedules whose shift starts in [start, end)"""
        return (
            db.query(Schedule)
            .filter(Schedule.shift_start >= start, Schedule.shift_start < end)
            .order_by(Schedule.shift_start.asc(), Schedule.id.asc())
            .all()
        )

    @staticmethod
    def get_schedule_by_id(db: Session, schedule_id: int) -> Optional[Schedule]:
        return db.query(Schedule).filter(Schedule.id == schedule_id).first()

    @staticmethod
    def get_schedule_with_details(db: Session, schedule_id: int) -> Optional[Schedule]:
        """Get a schedule with its tasks and visit loaded"""
        return (
            db.query(Schedule)
            .options(selectinload(Schedule.tasks), joinedload(Schedule.visit))
            .filter(Schedule.id == schedule_id)
            .first()
        )

    @staticmethod
    def schedule_exists(db: Session, schedule_id: int) -> bool:
        return (
            db.query(func.count(Schedule.id)).filter(Schedule.id == schedule_id).scalar() > 0
        )

    @staticmethod
    def create_schedule(
        db: Session,
        task_descriptions: Optional[list[str]] = None,
        activities: Optional[list[dict]] = None,
        **schedule_data,
    ) -> Schedule:
        """
        Create a schedule with its empty visit row, tasks and activities in one commit.

        Every child object is built before anything is added to the session,
        so a bad activity dict raises TypeError without writing a row.
        """
        activity_rows = [Activity(**a) for a in activities or []]
        schedule = Schedule(**schedule_data)
        schedule.visit = Visit()
        schedule.tasks = [Task(description=d) for d in task_descriptions or []]
        schedule.activities = activity_rows

        db.add(schedule)
        db.commit()
        db.refresh(schedule)
        return schedule

    @staticmethod
    def count_schedules(
        db: Session,
        status: Optional[ScheduleStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        query = db.query(func.count(Schedule.id))

        if status is not None:
            query = query.filter(Schedule.status == status)
        if start is not None:
            query = query.filter(Schedule.shift_start >= start)
        if end is not None:
            query = query.filter(Schedule.shift_start < end)

        return query.scalar() or 0
