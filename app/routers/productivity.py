from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.dates import day_bounds
from app.core.dependencies import get_current_user, parse_day_bound_or_400
from app.models.user import User
from app.schemas.productivity import SnapshotResponse, SnapshotUpdate, StatsResponse
from app.services.metrics_service import get_day_snapshot
from app.services.snapshot_store import get_user_snapshot
from app.services.stats_service import get_range_snapshots, get_range_stats, snapshot_to_dict

router = APIRouter(prefix="/productivity", tags=["productivity"])

# au-delà, today - days sort du calendrier de datetime
MAX_STATS_DAYS = 36500


@router.get("", response_model=List[SnapshotResponse])
def list_snapshots(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None)
):
    """Snapshots du plus récent au plus ancien, plafonnés à SNAPSHOT_QUERY_LIMIT."""
    start = parse_day_bound_or_400(start_date)
    end = parse_day_bound_or_400(end_date, end_of_day=True)
    snapshots = get_range_snapshots(db, current_user.id, start, end, ascending=False)
    return [snapshot_to_dict(s) for s in snapshots]


@router.get("/current", response_model=SnapshotResponse)
def current(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # pas de snapshot aujourd'hui → snapshot à zéro, non enregistré
    return snapshot_to_dict(get_day_snapshot(db, current_user.id, date.today()))


@router.get("/stats", response_model=StatsResponse)
def stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    days: int = Query(settings.STATS_DEFAULT_DAYS, ge=0, le=MAX_STATS_DAYS)
):
    start, _ = day_bounds(date.today() - timedelta(days=days))
    return get_range_stats(db, current_user.id, start)


@router.put("/{snapshot_id}", response_model=SnapshotResponse)
def update_snapshot(
    snapshot_id: int,
    snapshot_data: SnapshotUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Saisie manuelle de focus_time et breaks, les champs dérivés ne bougent pas."""
    snapshot = get_user_snapshot(db, current_user.id, snapshot_id)
    if not snapshot:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Productivity entry not found")

    for field, value in snapshot_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(snapshot, field, value)

    db.commit()
    db.refresh(snapshot)
    return snapshot_to_dict(snapshot)
