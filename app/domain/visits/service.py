"""
Visit lifecycle service
Handles clock-in (start) and clock-out (end) of a scheduled visit
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import ScheduleStatus
from ...shared.validators import validate_coordinates
from .lifecycle import ensure_transition
from .repository import VisitRepository

logger = logging.getLogger(__name__)


class VisitLifecycleService:
    """
    Drives a schedule through upcoming → in_progress → completed.

    Each transition writes the schedule status and the visit row in one
    transaction. Both writes are conditional on the state that was checked,
    so a concurrent request that got there first makes this one fail with a
    ConflictError instead of overwriting it.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.repo = VisitRepository()
        self.clock = clock

    def start_visit(self, schedule_id: int, latitude: float, longitude: float) -> dict:
        self._validate_location(latitude, longitude)

        current = self._current_status(schedule_id)
        ensure_transition(current, ScheduleStatus.IN_PROGRESS)

        now = self._now()
        self._commit_transition(
            schedule_id,
            expected=ScheduleStatus.UPCOMING,
            target=ScheduleStatus.IN_PROGRESS,
            write_visit=lambda: self.repo.record_start(
                self.db, schedule_id, now, latitude, longitude
            ),
        )

        logger.info(
            f"✅ Visit started for schedule {schedule_id} at ({latitude}, {longitude})"
        )
        return {
            "message": "Visit started successfully",
            "timestamp": now,
            "location": {"latitude": latitude, "longitude": longitude},
        }

    def end_visit(self, schedule_id: int, latitude: float, longitude: float) -> dict:
        self._validate_location(latitude, longitude)

        current = self._current_status(schedule_id)
        ensure_transition(current, ScheduleStatus.COMPLETED)

        visit = self.repo.get_visit_for_schedule(self.db, schedule_id)
        if not visit or visit.start_time is None:
            raise ConflictError("Visit not properly started")
        started_at = visit.start_time

        now = self._now()
        self._commit_transition(
            schedule_id,
            expected=ScheduleStatus.IN_PROGRESS,
            target=ScheduleStatus.COMPLETED,
            write_visit=lambda: self.repo.record_end(
                self.db, schedule_id, now, latitude, longitude
            ),
        )

        duration_minutes = int((now - started_at).total_seconds() // 60)
        logger.info(
            f"✅ Visit ended for schedule {schedule_id} after {duration_minutes} minutes"
        )
        return {
            "message": "Visit ended successfully",
            "start_time": started_at,
            "end_time": now,
            "duration_minutes": duration_minutes,
            "end_location": {"latitude": latitude, "longitude": longitude},
        }

    def _now(self) -> datetime:
        # The store keeps whole seconds
        return self.clock().replace(microsecond=0)

    @staticmethod
    def _validate_location(latitude: float, longitude: float) -> None:
        try:
            validate_coordinates(latitude, longitude)
        except ValueError as e:
            raise ValidationError(
                "Invalid latitude or longitude",
                details={"field": "coordinates", "error": str(e)},
            )

    def _current_status(self, schedule_id: int) -> ScheduleStatus:
        status = self.repo.get_schedule_status(self.db, schedule_id)
        if status is None:
            raise NotFoundError("Schedule not found")
        return status

    def _commit_transition(
        self,
        schedule_id: int,
        expected: ScheduleStatus,
        target: ScheduleStatus,
        write_visit: Callable[[], int],
    ) -> None:
        """Apply both writes or neither"""
        try:
            if self.repo.transition_schedule(self.db, schedule_id, expected, target) != 1:
                logger.warning(
                    f"⚠️ Schedule {schedule_id} left {expected.value} before the update applied"
                )
                raise ConflictError(
                    "Visit status changed by another request",
                    details={"expected_status": expected.value},
                )
            if write_visit() != 1:
                raise ConflictError("Visit record is missing or already updated")
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
