import enum

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class ScheduleStatus(str, enum.Enum):
    """Lifecycle of a caregiver shift"""

    UPCOMING = "upcoming"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    MISSED = "missed"  # set out-of-band, never by the visit endpoints


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    NOT_COMPLETED = "not_completed"


def _enum_column(enum_cls, default):
    # Persist the lowercase values, not the member names
    return Column(
        SAEnum(
            enum_cls,
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        default=default,
        nullable=False,
        index=True,
    )


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    client_name = Column(String(255), nullable=False)
    shift_start = Column(DateTime, nullable=False, index=True)
    shift_end = Column(DateTime, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Status workflow: upcoming → in_progress → completed (missed is exogenous)
    status = _enum_column(ScheduleStatus, ScheduleStatus.UPCOMING)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    tasks = relationship(
        "Task", back_populates="schedule", order_by="Task.id", cascade="all, delete-orphan"
    )
    visit = relationship(
        "Visit", back_populates="schedule", uselist=False, cascade="all, delete-orphan"
    )
    activities = relationship(
        "Activity",
        back_populates="schedule",
        order_by="[Activity.created_at, Activity.id]",
        cascade="all, delete-orphan",
    )


class Task(Base):
    """A care action the caregiver performs during the visit"""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = _enum_column(TaskStatus, TaskStatus.PENDING)
    reason = Column(Text, nullable=True)  # Why the task was not completed

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedule = relationship("Schedule", back_populates="tasks")


class Visit(Base):
    """Clock-in / clock-out log for a schedule (one row per schedule)"""

    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        Integer, ForeignKey("schedules.id"), nullable=False, unique=True, index=True
    )

    # Actual execution times and locations
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    start_lat = Column(Float, nullable=True)
    start_lng = Column(Float, nullable=True)
    end_lat = Column(Float, nullable=True)
    end_lng = Column(Float, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedule = relationship("Schedule", back_populates="visit")


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    is_resolved = Column(Boolean, default=False, nullable=False)
    reason = Column(Text, nullable=True)  # Why the activity was left open

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedule = relationship("Schedule", back_populates="activities")
