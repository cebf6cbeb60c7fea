# apps/tasks/domain/services/task_service.py
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from apps.tasks.domain.entities import (
    TRACKED_FIELDS, HistoryAction, HistoryEntry, TaskEntity, TaskStatus, history_value,
)
from apps.tasks.domain.exceptions import TransitionBlocked
from apps.tasks.ports.repositories import ITaskRepository

# Atrybuty, których nie wolno zmieniać przez aktualizację
READ_ONLY_ATTRS = {'id', 'project_id', 'reporter_id'}


class TaskService:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def check_transition(self, task: TaskEntity, new_status: Optional[TaskStatus]) -> None:
        """
        Strażnicy przejść statusu. Sprawdzamy tylko faktyczną zmianę statusu.
        - wejście w DONE: wszystkie zależności i podzadania muszą być DONE
        - wejście w IN_PROGRESS: wszystkie zależności muszą być DONE
        Pozostałe przejścia (również reopen DONE -> IN_PROGRESS) są dozwolone.
        """
        if new_status is None or new_status == task.status:
            return

        if new_status == TaskStatus.DONE:
            blocking = self._incomplete(self.repository.get_many(task.dependency_ids))
            if blocking:
                raise TransitionBlocked(
                    f"Cannot complete task. Prerequisite tasks are incomplete: {', '.join(blocking)}",
                    blocking
                )

            open_subtasks = self._incomplete(self.repository.get_subtasks(task.id))
            if open_subtasks:
                raise TransitionBlocked(
                    f"Cannot complete parent task. {len(open_subtasks)} sub-tasks are still open: "
                    f"{', '.join(open_subtasks)}",
                    open_subtasks
                )

        elif new_status == TaskStatus.IN_PROGRESS:
            blocking = self._incomplete(self.repository.get_many(task.dependency_ids))
            if blocking:
                raise TransitionBlocked(
                    f"Cannot start task. Dependencies are incomplete: {', '.join(blocking)}",
                    blocking
                )

    def build_history(
            self,
            task: TaskEntity,
            changes: Dict[str, Any],
            actor_id: int,
            now: datetime
        ) -> List[HistoryEntry]:
        """Jeden wpis na każde zmienione pole z listy śledzonych."""
        entries = []
        for field_name, attr in TRACKED_FIELDS.items():
            if attr not in changes:
                continue

            old_value = history_value(getattr(task, attr))
            new_value = history_value(changes[attr])
            if old_value == new_value:
                continue

            action = HistoryAction.STATUS_CHANGE if field_name == 'status' else HistoryAction.UPDATED
            entries.append(HistoryEntry(
                field=field_name,
                old_value=old_value,
                new_value=new_value,
                user_id=actor_id,
                timestamp=now,
                action=action,
            ))
        return entries

    def apply_changes(self, task: TaskEntity, changes: Dict[str, Any]) -> TaskEntity:
        allowed = {f.name for f in fields(TaskEntity)} - READ_ONLY_ATTRS
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown task fields: {', '.join(sorted(unknown))}")
        return replace(task, **changes)

    @staticmethod
    def _incomplete(tasks: List[TaskEntity]) -> List[str]:
        return [t.title for t in tasks if not t.is_done()]
