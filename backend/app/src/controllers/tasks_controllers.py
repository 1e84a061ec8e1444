"""Task endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.tasks_schema import (
    TaskCreate,
    TaskResponse,
    TaskStatusUpdate,
)
from src.services.crm.tasks_service import TaskService, get_task_service

task_router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@task_router.get("")
def list_tasks(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    return [TaskResponse.from_task(task) for task in task_service.list_tasks(db, user_id)]


@task_router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.from_task(task_service.create_task(db, user_id, task_in))


@task_router.put("/{task_id}")
def update_task(
    task_id: int,
    update: TaskStatusUpdate,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.from_task(task_service.update_status(db, task_id, update.status))
