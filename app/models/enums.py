"""Valeurs fermées partagées par les tâches, les snapshots et les agrégats"""

from enum import Enum
from typing import Dict


class TaskCategory(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    LEARNING = "learning"
    OTHER = "other"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]

    @classmethod
    def zero_breakdown(cls) -> Dict[str, int]:
        """Mapping catégorie -> 0 avec les cinq clés, dans l'ordre canonique."""
        return {member.value: 0 for member in cls}


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]
