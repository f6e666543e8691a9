"""Schedule service - Read views and dashboard statistics"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Schedule, ScheduleStatus
from .repository import ScheduleRepository
from .schemas import ScheduleCreate

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service layer for schedule business logic"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.repo = ScheduleRepository()
        self.clock = clock

    def _today_range(self) -> tuple[datetime, datetime]:
        """Server-local calendar day as a half-open range"""
        start = datetime.combine(self.clock().date(), datetime.min.time())
        return start, start + timedelta(days=1)

    def get_schedules(self) -> list[Schedule]:
        return self.repo.get_schedules(self.db)

    def get_today_schedules(self) -> list[Schedule]:
        start, end = self._today_range()
        return self.repo.get_schedules_between(self.db, start, end)

    def get_schedule(self, schedule_id: int) -> Schedule:
        """Get a schedule with tasks and visit"""
        schedule = self.repo.get_schedule_with_details(self.db, schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def create_schedule(self, data: ScheduleCreate) -> Schedule:
        logger.info(f"📝 Creating schedule for client: {data.client_name}")
        try:
            return self.repo.create_schedule(
                self.db,
                task_descriptions=data.tasks,
                client_name=data.client_name.strip(),
                shift_start=data.shift_start,
                shift_end=data.shift_end,
                latitude=data.latitude,
                longitude=data.longitude,
                status=ScheduleStatus.UPCOMING,
            )
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def get_stats(self) -> dict:
        start, end = self._today_range()
        return {
            "total_schedules": self.repo.count_schedules(self.db),
            "missed_schedules": self.repo.count_schedules(self.db, status=ScheduleStatus.MISSED),
            "upcoming_today": self.repo.count_schedules(
                self.db, status=ScheduleStatus.UPCOMING, start=start, end=end
            ),
            "completed_today": self.repo.count_schedules(
                self.db, status=ScheduleStatus.COMPLETED, start=start, end=end
            ),
        }
