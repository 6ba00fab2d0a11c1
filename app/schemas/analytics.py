"""Schemas du dashboard et du résumé de rapport"""

from typing import Dict, List, Optional

from app.schemas.base import CamelModel
from app.schemas.productivity import SnapshotResponse


class DailyProductivityRow(CamelModel):
    date: str
    tasks_completed: int
    tasks_planned: int
    completion_rate: float
    productivity_score: int
    total_work_time: int
    focus_time: int
    breaks: int


class StatusBreakdown(CamelModel):
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0


class TaskBreakdown(CamelModel):
    by_status: StatusBreakdown
    by_category: Dict[str, int]
    by_priority: Dict[str, int]


class TimeAnalysis(CamelModel):
    total_work_time: int
    average_work_time_per_day: float
    total_focus_time: int
    average_focus_time_per_day: float


class ProductivityTrendPoint(CamelModel):
    date: str
    score: int


class CompletionTrendPoint(CamelModel):
    date: str
    completed: int
    planned: int


class Trends(CamelModel):
    productivity_trend: List[ProductivityTrendPoint]
    completion_trend: List[CompletionTrendPoint]


class DashboardSummary(CamelModel):
    total_days: int
    total_tasks_completed: int
    total_tasks_planned: int
    overall_productivity_score: float
    best_day: Optional[SnapshotResponse] = None


class DashboardResponse(CamelModel):
    daily_productivity: List[DailyProductivityRow]
    task_breakdown: TaskBreakdown
    time_analysis: TimeAnalysis
    category_time_breakdown: Dict[str, int]
    trends: Trends
    summary: DashboardSummary


class DateRange(CamelModel):
    start: str
    end: str


class ReportSummaryResponse(CamelModel):
    date_range: DateRange
    total_tasks_planned: int
    total_tasks_completed: int
    completion_rate: float
    total_work_time: int
    average_productivity_score: float
    category_breakdown: Dict[str, int]
    status_breakdown: StatusBreakdown
