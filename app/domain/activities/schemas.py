"""Activity domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.responses import LocalDateTime


class ActivityResponse(BaseModel):
    id: int
    schedule_id: int
    title: str
    description: str
    is_resolved: bool
    reason: str = ""
    created_at: Optional[LocalDateTime] = None
    updated_at: Optional[LocalDateTime] = None

    @field_validator("reason", mode="before")
    @classmethod
    def empty_reason(cls, v):
        return v or ""

    class Config:
        from_attributes = True


class ActivityCreate(BaseModel):
    title: str
    description: str

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class ActivityUpdate(BaseModel):
    """Resolve or reopen an activity; unresolved needs a reason"""

    is_resolved: bool
    reason: Optional[str] = None
