"""This module provides the TaskService class, including the AI task generator."""

import logging
from datetime import timedelta
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.tasks_crud import CRUDTask
from src.repositories.crm.database import utcnow
from src.repositories.crm.models.tasks_model import Task
from src.repositories.crm.schemas.tasks_schema import TaskCreate
from src.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for handling task-related operations."""

    def __init__(self, repository: CRUDTask, customer_repository: CRUDCustomer) -> None:
        """
        Initialize the TaskService.

        Args:
            repository (CRUDTask): Repository for task database operations.
            customer_repository (CRUDCustomer): Used to check the referenced customer.
        """
        self.repository = repository
        self.customer_repository = customer_repository

    def create_ai_task(
        self,
        db: Session,
        customer_id: int,
        user_id: int,
        title: str,
        description: Optional[str],
        priority: str = "high",
        due_in_days: int = 2,
    ) -> Task:
        """
        Add an AI generated follow-up task.

        The task is flushed, not committed: it joins the transaction of the
        workflow that triggered it. Repeated triggers create repeated tasks.

        Args:
            db (Session): The database session.
            customer_id (int): Customer the follow-up is about.
            user_id (int): User the task is assigned to.
            title (str): Task title.
            description (Optional[str]): Usually the suggested next actions.
            priority (str): Task priority.
            due_in_days (int): Due date offset from now.

        Returns:
            Task: The pending task.
        """
        task = self.repository.create(
            db,
            {
                "customer_id": customer_id,
                "user_id": user_id,
                "title": title,
                "description": description,
                "priority": priority,
                "due_date": utcnow() + timedelta(days=due_in_days),
                "task_type": "ai_generated",
                "created_by_ai": True,
            },
        )
        logger.info(
            "AI task created for customer %s (due in %s days)", customer_id, due_in_days
        )
        return task

    def create_task(self, db: Session, user_id: int, task_in: TaskCreate) -> Task:
        """Create a manual task for ``user_id``."""
        if self.customer_repository.get(db, task_in.customer_id) is None:
            raise NotFoundError("Customer not found")

        task = self.repository.create(
            db,
            {
                **task_in.model_dump(),
                "user_id": user_id,
                "task_type": "manual",
                "created_by_ai": False,
            },
        )
        db.commit()
        db.refresh(task)
        return task

    def list_tasks(self, db: Session, user_id: int) -> List[Task]:
        return self.repository.get_by_user_id(db, user_id)

    def update_status(self, db: Session, task_id: int, status: str) -> Task:
        task = self.repository.get(db, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        self.repository.update_status(db, task, status)
        db.commit()
        db.refresh(task)
        return task


# Dependency Injection for FastAPI
def get_task_service(
    repository: CRUDTask = Depends(),
    customer_repository: CRUDCustomer = Depends(),
) -> TaskService:
    """Retrieve an instance of TaskService with the provided repositories."""
    return TaskService(repository, customer_repository)
