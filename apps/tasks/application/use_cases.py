# apps/tasks/application/use_cases.py
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from apps.tasks.domain.entities import TaskEntity, TaskStatus
from apps.tasks.domain.exceptions import TaskNotFound, TransitionBlocked
from apps.tasks.domain.services import TaskService
from apps.tasks.ports.notifier import ITaskNotifier
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CreateTaskInput:
    title: str
    project_id: int
    reporter_id: int
    description: str = ""
    status: str = TaskStatus.TODO.value
    priority: str = 'medium'
    type: str = 'task'
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    actual_hours: float = 0
    milestone_id: Optional[int] = None
    parent_task_id: Optional[int] = None
    assignee_ids: List[int] = field(default_factory=list)
    dependency_ids: List[int] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    order: int = 0


class CreateTaskUseCase:
    def __init__(self, repository: ITaskRepository, notifier: ITaskNotifier):
        self.repository = repository
        self.notifier = notifier

    def execute(self, input_dto: CreateTaskInput) -> TaskEntity:
        if not input_dto.title or not input_dto.title.strip():
            raise ValueError("Task title cannot be empty")

        task = TaskEntity(
            id=None,
            title=input_dto.title.strip(),
            project_id=input_dto.project_id,
            reporter_id=input_dto.reporter_id,
            description=input_dto.description,
            status=TaskStatus(input_dto.status),
            priority=input_dto.priority,
            type=input_dto.type,
            due_date=input_dto.due_date,
            estimated_hours=input_dto.estimated_hours,
            actual_hours=input_dto.actual_hours,
            milestone_id=input_dto.milestone_id,
            parent_task_id=input_dto.parent_task_id,
            assignee_ids=[int(a) for a in input_dto.assignee_ids],
            dependency_ids=[int(d) for d in input_dto.dependency_ids],
            tags=list(input_dto.tags),
            order=input_dto.order,
        )
        task = self.repository.save(task)
        actor_id = int(input_dto.reporter_id)

        for assignee_id in task.assignee_ids:
            if assignee_id != actor_id:
                self.notifier.assigned(task, assignee_id, actor_id, new_task=True)

        # Manager projektu dostaje info, jeśli to nie on utworzył zadanie
        manager_id = self.repository.get_project_manager_id(task.project_id)
        if manager_id is not None and int(manager_id) != actor_id:
            self.notifier.task_created(task, manager_id, actor_id)

        logger.info("Task %s created in project %s by user %s", task.id, task.project_id, actor_id)
        return task


@dataclass
class UpdateTaskInput:
    task_id: int
    actor_id: int
    # Klucze to atrybuty TaskEntity (np. assignee_ids, milestone_id)
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UpdateTaskResult:
    task: TaskEntity
    previous: TaskEntity
    history: list

    @property
    def changed_fields(self) -> List[str]:
        return [entry.field for entry in self.history]


class UpdateTaskUseCase:
    """
    Aktualizacja zadania z pilnowaniem przejść statusu.
    Naruszenie strażnika przerywa całą aktualizację (żadne pole nie jest zapisane).
    """

    def __init__(
            self,
            repository: ITaskRepository,
            notifier: ITaskNotifier,
            clock: Callable[[], datetime] = utc_now
        ):
        self.repository = repository
        self.notifier = notifier
        self.clock = clock
        self.service = TaskService(repository)

    def execute(self, input_dto: UpdateTaskInput) -> UpdateTaskResult:
        # 1. Pobierz zadanie
        task = self.repository.get_by_id(input_dto.task_id)
        if task is None:
            raise TaskNotFound("Task not found")

        changes = dict(input_dto.changes)
        if changes.get('status') is not None:
            changes['status'] = TaskStatus(changes['status'])

        # 2. Strażnicy (przed jakimkolwiek zapisem)
        try:
            self.service.check_transition(task, changes.get('status'))
        except TransitionBlocked as exc:
            logger.info("Task %s: transition to %s rejected: %s", task.id, changes.get('status'), exc)
            raise

        # 3. Historia + zapis
        actor_id = int(input_dto.actor_id)
        history = self.service.build_history(task, changes, actor_id, self.clock())
        updated = self.repository.save(self.service.apply_changes(task, changes))
        if history:
            self.repository.append_history(updated.id, history)

        changed = {entry.field for entry in history}

        # 4. Powiadomienia
        if 'status' in changed:
            self.notifier.status_changed(updated, actor_id)
            logger.info("Task %s: %s -> %s", updated.id, task.status.value, updated.status.value)

        if 'assignees' in changed:
            # Każdy z listy poza aktorem (nie tylko nowo dodani)
            for assignee_id in updated.assignee_ids:
                if int(assignee_id) != actor_id:
                    self.notifier.assigned(updated, int(assignee_id), actor_id)

        return UpdateTaskResult(task=updated, previous=task, history=history)
