"""Snapshot de productivité journalier (un par user et par jour)"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON, UniqueConstraint
from datetime import datetime
from app.core.database import Base
from app.models.enums import TaskCategory


class DailyProductivity(Base):
    __tablename__ = "daily_productivity"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_productivity_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)  # début de journée

    tasks_planned = Column(Integer, default=0)
    tasks_completed = Column(Integer, default=0)
    total_work_time = Column(Integer, default=0)  # minutes
    productivity_score = Column(Integer, default=0)  # 0-100, taux de complétion

    # saisis à la main, jamais recalculés
    focus_time = Column(Integer, default=0)
    breaks = Column(Integer, default=0)

    category_breakdown = Column(JSON, default=lambda: TaskCategory.zero_breakdown())

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
