"""Visit domain schemas"""

from typing import Optional

from pydantic import BaseModel

from ...shared.responses import LocalDateTime


class VisitResponse(BaseModel):
    id: int
    schedule_id: int
    start_time: Optional[LocalDateTime] = None
    end_time: Optional[LocalDateTime] = None
    start_lat: Optional[float] = None
    start_lng: Optional[float] = None
    end_lat: Optional[float] = None
    end_lng: Optional[float] = None
    created_at: Optional[LocalDateTime] = None
    updated_at: Optional[LocalDateTime] = None

    class Config:
        from_attributes = True


class VisitLocation(BaseModel):
    """Clock-in / clock-out position; range is checked by the lifecycle service"""

    latitude: float
    longitude: float


class StartVisitResult(BaseModel):
    message: str
    timestamp: LocalDateTime
    location: VisitLocation


class EndVisitResult(BaseModel):
    message: str
    start_time: LocalDateTime
    end_time: LocalDateTime
    duration_minutes: int
    end_location: VisitLocation


class StartVisitResponse(BaseModel):
    data: StartVisitResult
    request_id: Optional[str] = None
    timestamp: str
