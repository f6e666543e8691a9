"""Visit router - clock-in / clock-out endpoints"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import success_envelope
from .schemas import EndVisitResult, StartVisitResponse, VisitLocation
from .service import VisitLifecycleService

router = APIRouter(prefix="/schedules", tags=["Visits"])


def get_visit_service(db: Session = Depends(get_db)) -> VisitLifecycleService:
    """Dependency injection for VisitLifecycleService"""
    return VisitLifecycleService(db)


@router.post("/{schedule_id}/start", response_model=StartVisitResponse)
def start_visit(
    schedule_id: int,
    data: VisitLocation,
    request: Request,
    service: VisitLifecycleService = Depends(get_visit_service),
):
    """Start a visit: log clock-in time and location, move schedule to in_progress"""
    result = service.start_visit(schedule_id, data.latitude, data.longitude)
    return success_envelope(request, result)


@router.post("/{schedule_id}/end", response_model=EndVisitResult)
def end_visit(
    schedule_id: int,
    data: VisitLocation,
    service: VisitLifecycleService = Depends(get_visit_service),
):
    """End a visit: log clock-out time and location, move schedule to completed"""
    return service.end_visit(schedule_id, data.latitude, data.longitude)
