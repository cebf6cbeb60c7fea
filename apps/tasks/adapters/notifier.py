# apps/tasks/adapters/notifier.py
from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from apps.projects.models import Project
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.ports.notifier import ITaskNotifier


class DjangoTaskNotifier(ITaskNotifier):
    """Zamienia zdarzenia zadań na rekordy Notification."""

    def __init__(self, service: NotificationService = None):
        self.service = service or NotificationService()

    @staticmethod
    def _link(task: TaskEntity) -> str:
        return f"/tasks/{task.id}"

    @staticmethod
    def _project_title(task: TaskEntity) -> str:
        return Project.objects.filter(id=task.project_id).values_list('title', flat=True).first() or ""

    def status_changed(self, task: TaskEntity, actor_id: int) -> None:
        status_label = task.status.value.replace('_', ' ')
        self.service.notify(
            task.reporter_id,
            Notification.Type.PROJECT_UPDATE,
            "Task Status Updated",
            f"{task.title} is now {status_label}",
            sender_id=actor_id,
            link=self._link(task),
        )

    def assigned(self, task: TaskEntity, assignee_id: int, actor_id: int, new_task: bool = False) -> None:
        if new_task:
            title = "New Task Assigned"
            message = f'Task "{task.title}" has been assigned to you in project "{self._project_title(task)}"'
        else:
            title = "Task Assigned"
            message = f"You were assigned to: {task.title}"

        self.service.notify(
            assignee_id,
            Notification.Type.TASK_ASSIGNMENT,
            title,
            message,
            sender_id=actor_id,
            link=self._link(task),
        )

    def task_created(self, task: TaskEntity, manager_id: int, actor_id: int) -> None:
        self.service.notify(
            manager_id,
            Notification.Type.PROJECT_UPDATE,
            "New Task Created",
            f'A new task "{task.title}" was created in your project: {self._project_title(task)}',
            sender_id=actor_id,
            link=self._link(task),
        )
