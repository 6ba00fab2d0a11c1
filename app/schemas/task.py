"""Pydantic schemas for task request/response validation."""

from pydantic import ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional

from app.core.dates import to_local_naive
from app.models.enums import TaskCategory, TaskPriority, TaskStatus
from app.schemas.base import CamelModel


class TaskCreate(CamelModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: TaskCategory = TaskCategory.OTHER
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    scheduled_date: datetime
    scheduled_time: str = Field(min_length=1)
    estimated_duration: int = Field(default=60, ge=0)
    actual_duration: int = Field(default=0, ge=0)
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("scheduled_date")
    @classmethod
    def local_scheduled_date(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class TaskUpdate(CamelModel):
    """
    Patch partiel d'une tâche.

    Seuls les champs listés ici sont modifiables, tout autre champ est rejeté (422).
    productivity_score et completed_at sont dérivés, donc absents.
    """

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    scheduled_date: Optional[datetime] = None
    scheduled_time: Optional[str] = Field(default=None, min_length=1)
    estimated_duration: Optional[int] = Field(default=None, ge=0)
    actual_duration: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be empty")
        return value

    @field_validator("scheduled_date")
    @classmethod
    def local_scheduled_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value)


class TaskResponse(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str]
    category: str
    priority: str
    status: str
    scheduled_date: datetime
    scheduled_time: str
    estimated_duration: int
    actual_duration: int
    completed_at: Optional[datetime]
    productivity_score: float
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
