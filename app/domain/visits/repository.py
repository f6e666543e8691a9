"""Visit repository - Conditional writes for the visit lifecycle"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from ...models import Schedule, ScheduleStatus, Visit


class VisitRepository:
    """
    Repository for visit and schedule status writes.

    Each write is a single ``UPDATE ... WHERE <expected state>`` and returns
    the affected row count so the caller can tell whether it won. None of
    these methods commit.
    """

    @staticmethod
    def get_schedule_status(db: Session, schedule_id: int) -> Optional[ScheduleStatus]:
        row = db.query(Schedule.status).filter(Schedule.id == schedule_id).first()
        return row[0] if row else None

    @staticmethod
    def get_visit_for_schedule(db: Session, schedule_id: int) -> Optional[Visit]:
        return db.query(Visit).filter(Visit.schedule_id == schedule_id).first()

    @staticmethod
    def transition_schedule(
        db: Session, schedule_id: int, expected: ScheduleStatus, target: ScheduleStatus
    ) -> int:
        result = db.execute(
            update(Schedule)
            .where(Schedule.id == schedule_id, Schedule.status == expected)
            .values(status=target, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    def record_start(
        db: Session, schedule_id: int, started_at: datetime, latitude: float, longitude: float
    ) -> int:
        result = db.execute(
            update(Visit)
            .where(Visit.schedule_id == schedule_id, Visit.start_time.is_(None))
            .values(
                start_time=started_at,
                start_lat=latitude,
                start_lng=longitude,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    def record_end(
        db: Session, schedule_id: int, ended_at: datetime, latitude: float, longitude: float
    ) -> int:
        result = db.execute(
            update(Visit)
            .where(
                Visit.schedule_id == schedule_id,
                Visit.start_time.is_not(None),
                Visit.end_time.is_(None),
            )
            .values(
                end_time=ended_at,
                end_lat=latitude,
                end_lng=longitude,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
