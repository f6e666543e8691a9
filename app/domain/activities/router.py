"""Activity router - FastAPI endpoints for activity operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ActivityCreate, ActivityResponse, ActivityUpdate
from .service import ActivityService

router = APIRouter(tags=["Activities"])


def get_activity_service(db: Session = Depends(get_db)) -> ActivityService:
    """Dependency injection for ActivityService"""
    return ActivityService(db)


@router.get("/schedules/{schedule_id}/activities", response_model=list[ActivityResponse])
def get_schedule_activities(
    schedule_id: int, service: ActivityService = Depends(get_activity_service)
):
    """Get all activities for a schedule"""
    return service.get_activities(schedule_id)


@router.post(
    "/schedules/{schedule_id}/activities", response_model=ActivityResponse, status_code=201
)
def create_activity(
    schedule_id: int,
    data: ActivityCreate,
    service: ActivityService = Depends(get_activity_service),
):
    """Create a new (unresolved) activity for a schedule"""
    return service.create_activity(schedule_id, data)


@router.get("/activities/{activity_id}", response_model=ActivityResponse)
def get_activity(activity_id: int, service: ActivityService = Depends(get_activity_service)):
    return service.get_activity(activity_id)


@router.put("/activities/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: int,
    data: ActivityUpdate,
    service: ActivityService = Depends(get_activity_service),
):
    """Update the resolution status of an activity"""
    return service.update_activity(activity_id, data)
