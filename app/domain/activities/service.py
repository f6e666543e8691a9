"""Activity service - Business logic for activity operations"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import NotFoundError, ValidationError
from ...models import Activity
from ...shared.validators import require_reason
from ..schedules.repository import ScheduleRepository
from .repository import ActivityRepository
from .schemas import ActivityCreate, ActivityUpdate

logger = logging.getLogger(__name__)


class ActivityService:
    """Service layer for activity business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository()
        self.schedules = ScheduleRepository()

    def _require_schedule(self, schedule_id: int) -> None:
        if not self.schedules.schedule_exists(self.db, schedule_id):
            raise NotFoundError("Schedule not found")

    def get_activities(self, schedule_id: int) -> list[Activity]:
        self._require_schedule(schedule_id)
        return self.repo.get_activities_for_schedule(self.db, schedule_id)

    def get_activity(self, activity_id: int) -> Activity:
        activity = self.repo.get_activity_by_id(self.db, activity_id)
        if not activity:
            raise NotFoundError("Activity not found")
        return activity

    def create_activity(self, schedule_id: int, data: ActivityCreate) -> Activity:
        self._require_schedule(schedule_id)
        try:
            activity = self.repo.create_activity(
                self.db,
                schedule_id,
                title=data.title,
                description=data.description,
                is_resolved=False,
                reason="",
            )
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info(f"📝 Activity {activity.id} created for schedule {schedule_id}")
        return activity

    def update_activity(self, activity_id: int, data: ActivityUpdate) -> Activity:
        """
        Resolve or reopen an activity.

        Leaving an activity unresolved requires a reason; a resolved activity
        keeps no reason. Unlike tasks this is allowed in any schedule state.
        """
        reason = ""
        if not data.is_resolved:
            try:
                reason = require_reason(
                    data.reason, "Reason is required when activity is not resolved"
                )
            except ValueError as e:
                raise ValidationError(str(e), details={"field": "reason"})

        activity = self.get_activity(activity_id)
        try:
            return self.repo.update_activity(
                self.db, activity, is_resolved=data.is_resolved, reason=reason
            )
        except SQLAlchemyError:
            self.db.rollback()
            raise
