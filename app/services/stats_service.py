"""
Agrégats multi-jours: stats, dashboard, résumé de rapport.

Les fonctions pures prennent des snapshots triés par date croissante (objets
ORM ou n'importe quel objet avec les mêmes attributs). Les fonctions get_*
lisent le store et lèvent AggregationError si la base ne répond pas.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.dates import format_day
from app.core.errors import AggregationError
from app.models.enums import TaskCategory, TaskPriority, TaskStatus
from app.services.snapshot_store import find_snapshots
from app.services.task_service import find_tasks

logger = logging.getLogger(__name__)


def _mean(total: float, count: int) -> float:
    return total / count if count > 0 else 0


def _count_by(values: Iterable[Optional[str]], keys: List[str]) -> Dict[str, int]:
    counts = {key: 0 for key in keys}
    for value in values:
        if value in counts:
            counts[value] += 1
    return counts


def sum_category_breakdowns(snapshots: Iterable) -> Dict[str, int]:
    """Somme clé par clé des category_breakdown, clés inconnues ignorées."""
    totals = TaskCategory.zero_breakdown()
    for snapshot in snapshots:
        breakdown = snapshot.category_breakdown or {}
        for category in totals:
            totals[category] += breakdown.get(category) or 0
    return totals


def snapshot_to_dict(snapshot) -> Dict:
    breakdown = TaskCategory.zero_breakdown()
    for category in breakdown:
        breakdown[category] = (snapshot.category_breakdown or {}).get(category) or 0

    return {
        "id": snapshot.id,
        "user_id": snapshot.user_id,
        "date": snapshot.date,
        "tasks_planned": snapshot.tasks_planned or 0,
        "tasks_completed": snapshot.tasks_completed or 0,
        "total_work_time": snapshot.total_work_time or 0,
        "productivity_score": snapshot.productivity_score or 0,
        "focus_time": snapshot.focus_time or 0,
        "breaks": snapshot.breaks or 0,
        "category_breakdown": breakdown,
    }


def find_best_day(snapshots: Iterable):
    """Snapshot au score max; en cas d'égalité le premier rencontré gagne."""
    best = None
    for snapshot in snapshots:
        if best is None or snapshot.productivity_score > best.productivity_score:
            best = snapshot
    return best


def aggregate_snapshots(snapshots: List) -> Dict:
    count = len(snapshots)
    total_completed = sum(s.tasks_completed for s in snapshots)
    best = find_best_day(snapshots)

    return {
        "total_tasks_completed": total_completed,
        "total_tasks_planned": sum(s.tasks_planned for s in snapshots),
        "total_work_time": sum(s.total_work_time for s in snapshots),
        "average_productivity_score": _mean(sum(s.productivity_score for s in snapshots), count),
        "average_tasks_per_day": _mean(total_completed, count),
        "category_breakdown": sum_category_breakdowns(snapshots),
        "daily_data": [
            {
                "date": s.date,
                "tasks_completed": s.tasks_completed,
                "tasks_planned": s.tasks_planned,
                "productivity_score": s.productivity_score,
                "total_work_time": s.total_work_time,
            }
            for s in snapshots
        ],
        "best_day": snapshot_to_dict(best) if best is not None else None,
    }


def task_breakdown(tasks: Iterable) -> Dict:
    """
    Comptes par statut, catégorie et priorité calculés sur les tâches brutes.

    La priorité n'existe pas dans les snapshots, d'où la lecture des tâches.
    """
    tasks = list(tasks)
    by_status = _count_by((t.status for t in tasks), TaskStatus.values())
    by_status["in_progress"] = by_status.pop(TaskStatus.IN_PROGRESS.value)

    return {
        "by_status": by_status,
        "by_category": _count_by((t.category for t in tasks), TaskCategory.values()),
        "by_priority": _count_by((t.priority for t in tasks), TaskPriority.values()),
    }


def build_dashboard(snapshots: List, tasks: Iterable) -> Dict:
    count = len(snapshots)
    total_work_time = sum(s.total_work_time for s in snapshots)
    total_focus_time = sum(s.focus_time or 0 for s in snapshots)
    total_completed = sum(s.tasks_completed for s in snapshots)
    best = find_best_day(snapshots)

    daily = []
    productivity_trend = []
    completion_trend = []
    for s in snapshots:
        day = format_day(s.date)
        daily.append({
            "date": day,
            "tasks_completed": s.tasks_completed,
            "tasks_planned": s.tasks_planned,
            "completion_rate": _mean(s.tasks_completed * 100, s.tasks_planned),
            "productivity_score": s.productivity_score,
            "total_work_time": s.total_work_time,
            "focus_time": s.focus_time or 0,
            "breaks": s.breaks or 0,
        })
        productivity_trend.append({"date": day, "score": s.productivity_score})
        completion_trend.append({"date": day, "completed": s.tasks_completed, "planned": s.tasks_planned})

    return {
        "daily_productivity": daily,
        "task_breakdown": task_breakdown(tasks),
        "time_analysis": {
            "total_work_time": total_work_time,
            "average_work_time_per_day": _mean(total_work_time, count),
            "total_focus_time": total_focus_time,
            "average_focus_time_per_day": _mean(total_focus_time, count),
        },
        "category_time_breakdown": sum_category_breakdowns(snapshots),
        "trends": {
            "productivity_trend": productivity_trend,
            "completion_trend": completion_trend,
        },
        "summary": {
            "total_days": count,
            "total_tasks_completed": total_completed,
            "total_tasks_planned": sum(s.tasks_planned for s in snapshots),
            "overall_productivity_score": _mean(sum(s.productivity_score for s in snapshots), count),
            "best_day": snapshot_to_dict(best) if best is not None else None,
        },
    }


def build_report_summary(snapshots: List, tasks: Iterable, start: datetime, end: datetime) -> Dict:
    """Données du rapport imprimable (le rendu PDF n'est pas fait ici)."""
    tasks = list(tasks)
    planned = sum(s.tasks_planned for s in snapshots)
    completed = sum(s.tasks_completed for s in snapshots)
    breakdown = task_breakdown(tasks)

    return {
        "date_range": {
            "start": format_day(start),
            "end": format_day(end),
        },
        "total_tasks_planned": planned,
        "total_tasks_completed": completed,
        "completion_rate": _mean(completed * 100, planned),
        "total_work_time": sum(s.total_work_time for s in snapshots),
        "average_productivity_score": _mean(sum(s.productivity_score for s in snapshots), len(snapshots)),
        "category_breakdown": breakdown["by_category"],
        "status_breakdown": breakdown["by_status"],
    }


# ============ LECTURES STORE ============

def _read(user_id: int, reader):
    try:
        return reader()
    except SQLAlchemyError as e:
        logger.error(f"Aggregation read failed for user={user_id}: {e}")
        raise AggregationError() from e


def get_range_stats(db: Session, user_id: int, start: datetime, end: Optional[datetime] = None) -> Dict:
    snapshots = _read(user_id, lambda: find_snapshots(db, user_id, start, end))
    return aggregate_snapshots(snapshots)


def get_dashboard(db: Session, user_id: int, start: datetime, end: datetime) -> Dict:
    snapshots = _read(user_id, lambda: find_snapshots(db, user_id, start, end))
    tasks = _read(user_id, lambda: find_tasks(db, user_id, start=start, end=end))
    return build_dashboard(snapshots, tasks)


def get_report_summary(db: Session, user_id: int, start: datetime, end: datetime) -> Dict:
    snapshots = _read(user_id, lambda: find_snapshots(db, user_id, start, end))
    tasks = _read(user_id, lambda: find_tasks(db, user_id, start=start, end=end))
    return build_report_summary(snapshots, tasks, start, end)


def get_range_snapshots(
    db: Session,
    user_id: int,
    start: Optional[datetime],
    end: Optional[datetime],
    ascending: bool = True,
) -> List:
    return _read(user_id, lambda: find_snapshots(db, user_id, start, end, ascending=ascending))
