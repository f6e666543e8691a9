"""Activity repository - Database operations for activities"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Activity


class ActivityRepository:
    """Repository for activity database operations"""

    @staticmethod
    def get_activity_by_id(db: Session, activity_id: int) -> Optional[Activity]:
        return db.query(Activity).filter(Activity.id == activity_id).first()

    @staticmethod
    def get_activities_for_schedule(db: Session, schedule_id: int) -> list[Activity]:
        return (
            db.query(Activity)
            .filter(Activity.schedule_id == schedule_id)
            .order_by(Activity.created_at.asc(), Activity.id.asc())
            .all()
        )

    @staticmethod
    def create_activity(db: Session, schedule_id: int, **activity_data) -> Activity:
        activity = Activity(schedule_id=schedule_id, **activity_data)
        db.add(activity)
        db.commit()
        db.refresh(activity)
        return activity

    @staticmethod
    def update_activity(db: Session, activity: Activity, **updates) -> Activity:
        for key, value in updates.items():
            if hasattr(activity, key):
                setattr(activity, key, value)

        db.commit()
        db.refresh(activity)
        return activity
