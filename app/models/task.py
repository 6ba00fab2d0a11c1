"""Task model"""

from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, Index
from datetime import datetime
from app.core.database import Base
from app.models.enums import TaskCategory, TaskPriority, TaskStatus


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_scheduled", "user_id", "scheduled_date"),
        Index("ix_tasks_user_status", "user_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, default=TaskCategory.OTHER.value)
    priority = Column(String, default=TaskPriority.MEDIUM.value)
    status = Column(String, default=TaskStatus.PENDING.value)

    scheduled_date = Column(DateTime, nullable=False)
    scheduled_time = Column(String, nullable=False)
    estimated_duration = Column(Integer, default=60)  # minutes
    actual_duration = Column(Integer, default=0)  # minutes
    completed_at = Column(DateTime, nullable=True)
    productivity_score = Column(Float, default=0)  # 0-100, efficacité temps
    notes = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
