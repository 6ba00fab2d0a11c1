"""Accès aux tâches persistées"""

from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
from app.models.task import Task


def find_tasks(
    db: Session,
    user_id: int,
    status: Optional[str] = None,
    category: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Task]:
    query = db.query(Task).filter(Task.user_id == user_id)

    if status:
        query = query.filter(Task.status == status)
    if category:
        query = query.filter(Task.category == category)
    if start is not None:
        query = query.filter(Task.scheduled_date >= start)
    if end is not None:
        query = query.filter(Task.scheduled_date <= end)

    return query.order_by(Task.scheduled_date.asc(), Task.scheduled_time.asc()).all()


def find_tasks_in_window(db: Session, user_id: int, start: datetime, end: datetime) -> List[Task]:
    """Tâches planifiées dans [start, end], bornes incluses."""
    return db.query(Task).filter(
        Task.user_id == user_id,
        Task.scheduled_date >= start,
        Task.scheduled_date <= end
    ).all()


def get_user_task(db: Session, user_id: int, task_id: int) -> Optional[Task]:
    return db.query(Task).filter(
        Task.id == task_id,
        Task.user_id == user_id
    ).first()
