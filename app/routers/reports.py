from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import get_current_user, parse_range_or_400
from app.models.user import User
from app.schemas.analytics import ReportSummaryResponse
from app.services.stats_service import get_report_summary

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=ReportSummaryResponse)
def summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None)
):
    """Aperçu des données du rapport (totaux, taux de complétion, répartitions)."""
    start, end = parse_range_or_400(start_date, end_date, settings.REPORT_DEFAULT_DAYS)
    return get_report_summary(db, current_user.id, start, end)
