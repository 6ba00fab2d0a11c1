"""
Store des snapshots de productivité.

L'écriture passe par un INSERT ... ON CONFLICT (user_id, date) DO UPDATE,
seule opération atomique exigée du store.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.productivity import DailyProductivity

logger = logging.getLogger(__name__)

# dialectes qui savent faire un upsert en une requête
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def find_snapshot(db: Session, user_id: int, day_start: datetime, day_end: datetime) -> Optional[DailyProductivity]:
    return db.query(DailyProductivity).filter(
        DailyProductivity.user_id == user_id,
        DailyProductivity.date >= day_start,
        DailyProductivity.date <= day_end
    ).first()


def find_snapshots(
    db: Session,
    user_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    ascending: bool = True,
    limit: Optional[int] = None,
) -> List[DailyProductivity]:
    """
    Snapshots d'un user sur une période.

    On garde toujours les `limit` plus récents, puis on les rend dans l'ordre demandé.
    """
    if limit is None:
        limit = settings.SNAPSHOT_QUERY_LIMIT

    query = db.query(DailyProductivity).filter(DailyProductivity.user_id == user_id)
    if start is not None:
        query = query.filter(DailyProductivity.date >= start)
    if end is not None:
        query = query.filter(DailyProductivity.date <= end)

    latest = query.order_by(desc(DailyProductivity.date)).limit(limit).all()
    if ascending:
        latest.reverse()
    return latest


def get_user_snapshot(db: Session, user_id: int, snapshot_id: int) -> Optional[DailyProductivity]:
    return db.query(DailyProductivity).filter(
        DailyProductivity.id == snapshot_id,
        DailyProductivity.user_id == user_id
    ).first()


def upsert_snapshot(db: Session, user_id: int, day_start: datetime, fields: Dict) -> DailyProductivity:
    """
    Remplace les champs dérivés du snapshot (user_id, day_start), ou le crée.

    focus_time et breaks ne sont jamais dans `fields`: à la création ils prennent
    leur valeur par défaut, à la mise à jour ils restent intacts.
    """
    now = datetime.utcnow()
    dialect = db.get_bind().dialect.name
    insert = UPSERT_INSERTS.get(dialect)

    if insert is not None:
        stmt = insert(DailyProductivity).values(
            user_id=user_id,
            date=day_start,
            created_at=now,
            updated_at=now,
            **fields
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "date"],
            set_={**fields, "updated_at": now}
        )
        db.execute(stmt)
    else:
        logger.warning(f"No atomic upsert for dialect {dialect}, using read-then-write")
        snapshot = db.query(DailyProductivity).filter(
            DailyProductivity.user_id == user_id,
            DailyProductivity.date == day_start
        ).first()
        if snapshot is None:
            snapshot = DailyProductivity(user_id=user_id, date=day_start)
            db.add(snapshot)
        for field, value in fields.items():
            setattr(snapshot, field, value)

    db.commit()

    return db.query(DailyProductivity).filter(
        DailyProductivity.user_id == user_id,
        DailyProductivity.date == day_start
    ).populate_existing().one()
