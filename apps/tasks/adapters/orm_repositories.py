# apps/tasks/adapters/orm_repositories.py
from typing import Iterable, List, Optional
from apps.tasks.domain.entities import HistoryEntry, TaskEntity, TaskStatus
from apps.tasks.ports.repositories import ITaskRepository
from apps.tasks.models import Task as TaskModel, TaskHistory
from apps.projects.models import Project


class DjangoTaskRepository(ITaskRepository):
    def _queryset(self):
        # prefetch, żeby to_entity nie strzelało do DB po każde M2M
        return TaskModel.objects.prefetch_related('assignees', 'dependencies')

    def to_entity(self, model: TaskModel) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TaskEntity(
            id=model.id,
            title=model.title,
            project_id=model.project_id,
            reporter_id=model.reporter_id,
            description=model.description,
            status=TaskStatus(model.status),
            priority=model.priority,
            type=model.type,
            due_date=model.due_date,
            estimated_hours=model.estimated_hours,
            actual_hours=model.actual_hours,
            milestone_id=model.milestone_id,
            parent_task_id=model.parent_task_id,
            assignee_ids=sorted(u.id for u in model.assignees.all()),
            dependency_ids=sorted(t.id for t in model.dependencies.all()),
            tags=list(model.tags or []),
            order=model.order,
        )

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        try:
            task = self._queryset().get(id=task_id)
            return self.to_entity(task)
        except TaskModel.DoesNotExist:
            return None

    def get_many(self, task_ids: Iterable[int]) -> List[TaskEntity]:
        ids = list(task_ids)
        if not ids:
            return []
        return [self.to_entity(t) for t in self._queryset().filter(id__in=ids)]

    def get_subtasks(self, parent_id: int) -> List[TaskEntity]:
        qs = self._queryset().filter(parent_task_id=parent_id)
        return [self.to_entity(t) for t in qs]

    def save(self, task: TaskEntity) -> TaskEntity:
        data = {
            'title': task.title,
            'description': task.description,
            'status': task.status.value,
            'priority': task.priority,
            'type': task.type,
            'due_date': task.due_date,
            'estimated_hours': task.estimated_hours,
            'actual_hours': task.actual_hours,
            'milestone_id': task.milestone_id,
            'parent_task_id': task.parent_task_id,
            'tags': list(task.tags),
            'order': task.order,
        }

        if task.id:
            # Aktualizacja istniejącego (save(), żeby auto_now i sygnały zadziałały)
            obj = TaskModel.objects.get(id=task.id)
            for key, value in data.items():
                setattr(obj, key, value)
            obj.save()
        else:
            obj = TaskModel.objects.create(
                project_id=task.project_id,
                reporter_id=task.reporter_id,
                **data
            )

        obj.assignees.set(task.assignee_ids)
        obj.dependencies.set(task.dependency_ids)

        return self.get_by_id(obj.id)

    def append_history(self, task_id: int, entries: List[HistoryEntry]) -> None:
        TaskHistory.objects.bulk_create([
            TaskHistory(
                task_id=task_id,
                user_id=entry.user_id,
                action=entry.action.value,
                field=entry.field,
                old_value=entry.old_value,
                new_value=entry.new_value,
                timestamp=entry.timestamp,
            )
            for entry in entries
        ])

    def get_project_manager_id(self, project_id: int) -> Optional[int]:
        return Project.objects.filter(id=project_id).values_list('manager_id', flat=True).first()
