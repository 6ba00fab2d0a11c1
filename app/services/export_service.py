"""Export des snapshots en CSV ou JSON"""

import csv
import io
import json
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from app.core.dates import format_day
from app.models.enums import TaskCategory

CSV_HEADER = [
    "Date",
    "Tasks Completed",
    "Tasks Planned",
    "Productivity Score",
    "Total Work Time (min)",
    "Focus Time (min)",
    "Breaks",
    "Work Time",
    "Personal Time",
    "Health Time",
    "Learning Time",
    "Other Time",
]


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


def _category_minutes(snapshot) -> Dict[str, int]:
    breakdown = snapshot.category_breakdown or {}
    return {category: breakdown.get(category) or 0 for category in TaskCategory.values()}


def to_csv(snapshots: Iterable) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for s in snapshots:
        categories = _category_minutes(s)
        writer.writerow([
            format_day(s.date),
            s.tasks_completed,
            s.tasks_planned,
            s.productivity_score,
            s.total_work_time,
            s.focus_time or 0,
            s.breaks or 0,
            *(categories[category] for category in TaskCategory.values()),
        ])

    return buffer.getvalue()


def build_json_export(
    snapshots: Iterable,
    start: datetime,
    end: datetime,
    exported_at: Optional[datetime] = None,
) -> Dict:
    """Enveloppe JSON: date d'export, bornes de la période et jours complets."""
    if exported_at is None:
        exported_at = datetime.utcnow()

    data: List[Dict] = [
        {
            "date": format_day(s.date),
            "tasksCompleted": s.tasks_completed,
            "tasksPlanned": s.tasks_planned,
            "productivityScore": s.productivity_score,
            "totalWorkTime": s.total_work_time,
            "focusTime": s.focus_time or 0,
            "breaks": s.breaks or 0,
            "categoryBreakdown": _category_minutes(s),
        }
        for s in snapshots
    ]

    return {
        "exportDate": exported_at.isoformat(),
        "dateRange": {
            "start": format_day(start),
            "end": format_day(end),
        },
        "data": data,
    }


def format_export(
    snapshots: Iterable,
    shape: str,
    start: datetime,
    end: datetime,
    exported_at: Optional[datetime] = None,
) -> str:
    shape = ExportFormat(shape)
    if shape == ExportFormat.CSV:
        return to_csv(snapshots)
    return json.dumps(build_json_export(snapshots, start, end, exported_at))


def export_filename(shape: str, today: Optional[date] = None) -> str:
    if today is None:
        today = date.today()
    return f"productivity_export_{format_day(today)}.{ExportFormat(shape).value}"
