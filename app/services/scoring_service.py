"""
Score d'efficacité d'une tâche terminée.

Différent du score journalier: ici on compare durée estimée et durée réelle,
le score du jour mesure le taux de complétion.
"""

from datetime import datetime
from typing import Optional

from app.models.enums import TaskStatus

COMPLETED = TaskStatus.COMPLETED.value


def score_task_on_completion(task) -> Optional[float]:
    """
    estimated / actual * 100, borné à [0, 100].

    None si une des durées manque ou si actual vaut 0: le score précédent est gardé.
    Une estimation à 0 est une valeur présente et donne 0.
    """
    estimated = task.estimated_duration
    actual = task.actual_duration
    if estimated is None or not actual or actual <= 0:
        return None

    efficiency = estimated / actual * 100
    return min(100.0, max(0.0, efficiency))


def apply_status_transition(task, previous_status: Optional[str], now: Optional[datetime] = None) -> bool:
    """
    Applique les effets d'un changement de statut sur `task` (déjà modifiée).

    - passage à completed: completed_at posé une seule fois + score d'efficacité
    - sortie de completed: completed_at remis à None
    Retourne True si la tâche vient d'être complétée.
    """
    if previous_status != COMPLETED and task.status == COMPLETED:
        task.completed_at = now or datetime.utcnow()
        score = score_task_on_completion(task)
        if score is not None:
            task.productivity_score = score
        return True

    if previous_status == COMPLETED and task.status != COMPLETED:
        task.completed_at = None

    return False
