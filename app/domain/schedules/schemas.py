"""Schedule domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...models import ScheduleStatus
from ...shared.responses import LocalDateTime
from ...shared.validators import parse_timestamp, validate_latitude, validate_longitude
from ..tasks.schemas import TaskResponse
from ..visits.schemas import VisitResponse


class ScheduleResponse(BaseModel):
    """Schema for schedule response"""

    id: int
    client_name: str
    shift_start: LocalDateTime
    shift_end: LocalDateTime
    latitude: float
    longitude: float
    status: ScheduleStatus
    created_at: Optional[LocalDateTime] = None
    updated_at: Optional[LocalDateTime] = None

    class Config:
        from_attributes = True


class ScheduleDetailResponse(ScheduleResponse):
    """Schedule with its tasks and (when one exists) its visit log"""

    tasks: list[TaskResponse] = []
    visit: Optional[VisitResponse] = None


class ScheduleCreate(BaseModel):
    """Schema for creating a schedule together with its visit row and tasks"""

    client_name: str = Field(..., min_length=1, max_length=255)
    shift_start: datetime
    shift_end: datetime
    latitude: float
    longitude: float
    tasks: list[str] = []

    @field_validator("shift_start", "shift_end", mode="before")
    @classmethod
    def parse_shift_time(cls, v):
        return parse_timestamp(v)

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v):
        return validate_latitude(v)

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v):
        return validate_longitude(v)

    @field_validator("tasks")
    @classmethod
    def strip_tasks(cls, v):
        return [t.strip() for t in v if t and t.strip()]

    @model_validator(mode="after")
    def check_shift_window(self):
        if self.shift_end <= self.shift_start:
            raise ValueError("shift_end must be after shift_start")
        return self


class StatsResponse(BaseModel):
    """Dashboard counters"""

    total_schedules: int
    missed_schedules: int
    upcoming_today: int
    completed_today: int
