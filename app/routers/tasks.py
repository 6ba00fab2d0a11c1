import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.database import get_db
from app.core.dates import to_local_day
from app.core.dependencies import get_current_user, parse_day_bound_or_400
from app.models.enums import TaskCategory, TaskStatus
from app.models.user import User
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.services.metrics_service import recompute_daily_snapshot
from app.services.scoring_service import apply_status_transition
from app.services.task_service import find_tasks, get_user_task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    new_task = Task(user_id=current_user.id, **task_data.model_dump())
    # une tâche créée déjà terminée compte comme une transition
    apply_status_transition(new_task, None)

    db.add(new_task)
    db.commit()
    db.refresh(new_task)

    recompute_daily_snapshot(db, current_user.id, new_task.scheduled_date)
    db.refresh(new_task)
    return new_task


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    category: Optional[TaskCategory] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None)
):
    start = parse_day_bound_or_400(start_date)
    end = parse_day_bound_or_400(end_date, end_of_day=True)

    return find_tasks(
        db,
        current_user.id,
        status=status_filter.value if status_filter else None,
        category=category.value if category else None,
        start=start,
        end=end
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_user_task(db, current_user.id, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    return task


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Patch partiel d'une tâche.

    Recalcule le snapshot du jour planifié, et aussi celui de l'ancien jour
    quand scheduled_date change de journée.
    """
    task = get_user_task(db, current_user.id, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    previous_status = task.status
    previous_day = to_local_day(task.scheduled_date)

    update_data = task_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in ("title", "scheduled_date", "scheduled_time"):
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"{field} cannot be null")
        setattr(task, field, value)

    apply_status_transition(task, previous_status)

    db.commit()
    db.refresh(task)

    new_day = to_local_day(task.scheduled_date)
    recompute_daily_snapshot(db, current_user.id, new_day)
    if new_day != previous_day:
        logger.info(f"Task {task.id} moved from {previous_day} to {new_day}")
        recompute_daily_snapshot(db, current_user.id, previous_day)

    db.refresh(task)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_user_task(db, current_user.id, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    scheduled_day = to_local_day(task.scheduled_date)
    db.delete(task)
    db.commit()

    recompute_daily_snapshot(db, current_user.id, scheduled_day)
