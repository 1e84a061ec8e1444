"""
CRUD operations for tasks.

This module provides a `CRUDTask` class with methods to:
- Retrieve a task by ID.
- List a user's tasks by priority then due date.
- Create a task.
- Update the status of a task.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from src.repositories.crm.models.tasks_model import Task


_PRIORITY_ORDER = case(
    (Task.priority == "high", 1),
    (Task.priority == "medium", 2),
    (Task.priority == "low", 3),
    else_=4,
)


class CRUDTask:
    """Repository class for handling database operations related to tasks."""

    def get(self, db: Session, task_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id).first()

    def get_by_user_id(self, db: Session, user_id: int) -> List[Task]:
        """
        Retrieve a user's tasks, high priority first, then by due date.

        Args:
            db (Session): The database session.
            user_id (int): Owner of the tasks.

        Returns:
            List[Task]: The user's tasks.
        """
        return (
            db.query(Task)
            .filter(Task.user_id == user_id)
            .order_by(_PRIORITY_ORDER, Task.due_date.is_(None), Task.due_date, Task.id)
            .all()
        )

    def get_by_customer_id(self, db: Session, customer_id: int) -> List[Task]:
        return (
            db.query(Task)
            .filter(Task.customer_id == customer_id)
            .order_by(Task.id)
            .all()
        )

    def create(self, db: Session, data: Dict[str, Any]) -> Task:
        """Add a task to the session and flush it so it has an ID."""
        task = Task(**data)
        db.add(task)
        db.flush()
        return task

    def update_status(self, db: Session, task: Task, status: str) -> Task:
        task.status = status
        db.add(task)
        db.flush()
        return task
