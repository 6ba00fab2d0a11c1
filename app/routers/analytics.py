"""
Router analytics: dashboard et export des snapshots.

Endpoints:
- GET /analytics/dashboard - séries journalières, répartitions, tendances, résumé
- GET /analytics/export - export CSV ou JSON
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import get_current_user, parse_range_or_400
from app.models.user import User
from app.schemas.analytics import DashboardResponse
from app.services.export_service import ExportFormat, export_filename, format_export
from app.services.stats_service import get_dashboard, get_range_snapshots

router = APIRouter(prefix="/analytics", tags=["analytics"])

MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
}


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None)
):
    start, end = parse_range_or_400(start_date, end_date, settings.DASHBOARD_DEFAULT_DAYS)
    return get_dashboard(db, current_user.id, start, end)


@router.get("/export")
def export(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    export_format: ExportFormat = Query(ExportFormat.JSON, alias="format"),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None)
):
    """
    Exporte les snapshots de la période (90 jours par défaut).

    csv → fichier en pièce jointe, json → enveloppe {exportDate, dateRange, data}
    """
    start, end = parse_range_or_400(start_date, end_date, settings.EXPORT_DEFAULT_DAYS)

    snapshots = get_range_snapshots(db, current_user.id, start, end)

    content = format_export(snapshots, export_format, start, end)

    headers = {}
    if export_format == ExportFormat.CSV:
        headers["Content-Disposition"] = f"attachment; filename={export_filename(export_format)}"

    return Response(content=content, media_type=MEDIA_TYPES[export_format], headers=headers)
