"""Schedule router - FastAPI endpoints for schedule operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ScheduleCreate, ScheduleDetailResponse, ScheduleResponse, StatsResponse
from .service import ScheduleService

router = APIRouter(tags=["Schedules"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


@router.get("/schedules", response_model=list[ScheduleResponse])
def get_schedules(service: ScheduleService = Depends(get_schedule_service)):
    """Get all schedules ordered by shift start"""
    return service.get_schedules()


@router.post("/schedules", response_model=ScheduleDetailResponse, status_code=201)
def create_schedule(
    data: ScheduleCreate,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Create a schedule with its tasks (status starts as upcoming)"""
    return service.create_schedule(data)


# Must be registered before /schedules/{schedule_id}
@router.get("/schedules/today", response_model=list[ScheduleResponse])
def get_today_schedules(service: ScheduleService = Depends(get_schedule_service)):
    """Get schedules whose shift starts today (server local date)"""
    return service.get_today_schedules()


@router.get(
    "/schedules/{schedule_id}",
    response_model=ScheduleDetailResponse,
    response_model_exclude_none=True,
)
def get_schedule(schedule_id: int, service: ScheduleService = Depends(get_schedule_service)):
    """Get a schedule with its tasks and visit information"""
    return service.get_schedule(schedule_id)


@router.get("/stats", response_model=StatsResponse, tags=["Stats"])
def get_stats(service: ScheduleService = Depends(get_schedule_service)):
    """Dashboard statistics: total, missed, upcoming today, completed today"""
    return service.get_stats()
