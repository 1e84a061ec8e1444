"""Pydantic schemas for tasks."""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, StringConstraints

from src.repositories.crm.models.tasks_model import Task


TaskPriority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed"]
TaskType = Literal["manual", "ai_generated"]


class TaskCreate(BaseModel):
    """Payload for a manual task."""

    customer_id: int
    title: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    description: Optional[str] = None
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None


class TaskStatusUpdate(BaseModel):
    """Payload to move a task through its workflow."""

    status: TaskStatus


class TaskResponse(BaseModel):
    """Response model for a task joined with its customer."""

    id: int
    customer_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: TaskPriority
    status: TaskStatus
    task_type: TaskType
    due_date: Optional[datetime] = None
    created_by_ai: bool
    created_at: datetime
    customer_name: Optional[str] = None
    company: Optional[str] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        customer = task.customer
        return cls(
            id=task.id,
            customer_id=task.customer_id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            task_type=task.task_type,
            due_date=task.due_date,
            created_by_ai=task.created_by_ai,
            created_at=task.created_at,
            customer_name=customer.full_name if customer else None,
            company=customer.company if customer else None,
        )
