"""Task router - FastAPI endpoints for task operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import TaskResponse, TaskUpdate, TaskUpdateResponse
from .service import TaskService

router = APIRouter(tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.get("/schedules/{schedule_id}/tasks", response_model=list[TaskResponse])
def get_schedule_tasks(schedule_id: int, service: TaskService = Depends(get_task_service)):
    """Get all tasks for a schedule"""
    return service.get_tasks(schedule_id)


@router.put("/tasks/{task_id}", response_model=TaskUpdateResponse)
def update_task(
    task_id: int,
    data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Mark a task completed or not completed (visit must be in progress)"""
    task = service.update_task(task_id, data)
    return TaskUpdateResponse(
        message="Task updated successfully", task=TaskResponse.model_validate(task)
    )


# The web client posts task updates to this path
router.add_api_route(
    "/tasks/{task_id}/update",
    update_task,
    methods=["POST"],
    response_model=TaskUpdateResponse,
    include_in_schema=False,
)
