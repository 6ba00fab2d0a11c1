"""Schemas des snapshots journaliers et des stats sur une période"""

from pydantic import ConfigDict, Field
from datetime import datetime
from typing import Dict, List, Optional

from app.schemas.base import CamelModel


class SnapshotResponse(CamelModel):
    id: Optional[int] = None  # None pour le snapshot "aujourd'hui" non persisté
    user_id: int
    date: datetime
    tasks_planned: int
    tasks_completed: int
    total_work_time: int
    productivity_score: int
    focus_time: int
    breaks: int
    category_breakdown: Dict[str, int]


class SnapshotUpdate(CamelModel):
    """Édition manuelle: seuls focus_time et breaks sont modifiables."""

    model_config = ConfigDict(extra="forbid")

    focus_time: Optional[int] = Field(default=None, ge=0)
    breaks: Optional[int] = Field(default=None, ge=0)


class DailyDataPoint(CamelModel):
    date: datetime
    tasks_completed: int
    tasks_planned: int
    productivity_score: int
    total_work_time: int


class StatsResponse(CamelModel):
    total_tasks_completed: int
    total_tasks_planned: int
    total_work_time: int
    average_productivity_score: float
    average_tasks_per_day: float
    category_breakdown: Dict[str, int]
    daily_data: List[DailyDataPoint]
    best_day: Optional[SnapshotResponse] = None
