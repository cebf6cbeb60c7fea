# apps/tasks/domain/entities.py
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional


class TaskStatus(str, Enum):
    TODO = 'todo'
    IN_PROGRESS = 'in_progress'
    REVIEW = 'review'
    DONE = 'done'


class HistoryAction(str, Enum):
    UPDATED = 'updated'
    STATUS_CHANGE = 'status_change'


# Pola objęte historią: nazwa w API -> atrybut encji
TRACKED_FIELDS = {
    'title': 'title',
    'description': 'description',
    'status': 'status',
    'priority': 'priority',
    'due_date': 'due_date',
    'assignees': 'assignee_ids',
    'milestone': 'milestone_id',
}


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    project_id: int
    reporter_id: int
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: str = 'medium'
    type: str = 'task'

    # Czas
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    actual_hours: float = 0

    # Relacje (tylko ID, żeby nie wiązać obiektów domenowych z ORM)
    milestone_id: Optional[int] = None
    parent_task_id: Optional[int] = None
    assignee_ids: List[int] = field(default_factory=list)
    dependency_ids: List[int] = field(default_factory=list)

    tags: List[str] = field(default_factory=list)
    order: int = 0

    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


@dataclass(frozen=True)
class HistoryEntry:
    field: str
    old_value: Any
    new_value: Any
    user_id: int
    timestamp: datetime
    action: HistoryAction = HistoryAction.UPDATED


def history_value(value):
    """Wartość w postaci nadającej się do JSON i porównań."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set)):
        return sorted(int(v) for v in value)
    return value
