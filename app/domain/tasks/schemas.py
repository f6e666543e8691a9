"""Task domain schemas - Pydantic models for validation"""

from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...models import TaskStatus
from ...shared.responses import LocalDateTime


class TaskResponse(BaseModel):
    """Schema for task response"""

    id: int
    schedule_id: int
    description: str
    status: TaskStatus
    reason: str = ""
    created_at: Optional[LocalDateTime] = None
    updated_at: Optional[LocalDateTime] = None

    @field_validator("reason", mode="before")
    @classmethod
    def empty_reason(cls, v):
        return v or ""

    class Config:
        from_attributes = True


class TaskUpdate(BaseModel):
    """Schema for marking a task done or not done during a visit"""

    status: Literal["completed", "not_completed"]
    reason: Optional[str] = None


class TaskUpdateResponse(BaseModel):
    message: str
    task: TaskResponse
