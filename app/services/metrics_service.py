"""
Recalcul du snapshot de productivité d'un jour.

Le snapshot est toujours reconstruit depuis les tâches du jour puis écrit en
entier (pas de mise à jour incrémentale), donc recalculer deux fois donne le
même résultat.
"""

import logging
from typing import Dict, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.dates import DayLike, day_bounds
from app.core.errors import AggregationError
from app.models.enums import TaskCategory, TaskStatus
from app.models.productivity import DailyProductivity
from app.services.snapshot_store import find_snapshot, upsert_snapshot
from app.services.task_service import find_tasks_in_window

logger = logging.getLogger(__name__)

COMPLETED = TaskStatus.COMPLETED.value
CATEGORIES = set(TaskCategory.values())


def completion_score(completed: int, planned: int) -> int:
    """round(completed / planned * 100) arrondi au demi supérieur, 0 sans tâche."""
    if planned <= 0:
        return 0
    return (200 * completed + planned) // (2 * planned)


def compute_day_metrics(tasks: Iterable) -> Dict:
    """Champs dérivés d'un snapshot à partir des tâches d'un jour."""
    tasks = list(tasks)
    completed = [t for t in tasks if t.status == COMPLETED]

    category_breakdown = TaskCategory.zero_breakdown()
    total_work_time = 0
    for task in completed:
        minutes = task.actual_duration or 0
        total_work_time += minutes
        # catégorie inconnue: ignorée
        if task.category in CATEGORIES:
            category_breakdown[task.category] += minutes

    return {
        "tasks_planned": len(tasks),
        "tasks_completed": len(completed),
        "total_work_time": total_work_time,
        "productivity_score": completion_score(len(completed), len(tasks)),
        "category_breakdown": category_breakdown,
    }


def recompute_daily_snapshot(db: Session, user_id: int, when: DayLike) -> DailyProductivity:
    """Relit les tâches du jour de `when` et remplace le snapshot (user_id, jour)."""
    day_start, day_end = day_bounds(when)

    try:
        tasks = find_tasks_in_window(db, user_id, day_start, day_end)
        fields = compute_day_metrics(tasks)
        snapshot = upsert_snapshot(db, user_id, day_start, fields)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Recompute failed for user={user_id} day={day_start.date()}: {e}")
        raise AggregationError() from e

    logger.info(
        f"Recomputed snapshot user={user_id} day={day_start.date()} "
        f"planned={fields['tasks_planned']} completed={fields['tasks_completed']} "
        f"score={fields['productivity_score']}"
    )
    return snapshot


def zero_snapshot(user_id: int, when: DayLike) -> DailyProductivity:
    """Snapshot à zéro, non persisté, pour un jour sans données."""
    day_start, _ = day_bounds(when)
    return DailyProductivity(
        user_id=user_id,
        date=day_start,
        tasks_planned=0,
        tasks_completed=0,
        total_work_time=0,
        productivity_score=0,
        focus_time=0,
        breaks=0,
        category_breakdown=TaskCategory.zero_breakdown()
    )


def get_day_snapshot(db: Session, user_id: int, when: DayLike) -> DailyProductivity:
    """Snapshot stocké du jour, ou un snapshot à zéro s'il n'existe pas encore."""
    day_start, day_end = day_bounds(when)
    try:
        snapshot = find_snapshot(db, user_id, day_start, day_end)
    except SQLAlchemyError as e:
        logger.error(f"Snapshot read failed for user={user_id} day={day_start.date()}: {e}")
        raise AggregationError() from e

    if snapshot is None:
        return zero_snapshot(user_id, when)
    return snapshot
