# apps/tasks/ports/notifier.py
from abc import ABC, abstractmethod
from apps.tasks.domain.entities import TaskEntity


class ITaskNotifier(ABC):
    @abstractmethod
    def status_changed(self, task: TaskEntity, actor_id: int) -> None:
        """Powiadamia zgłaszającego (reporter) o nowym statusie."""
        pass

    @abstractmethod
    def assigned(self, task: TaskEntity, assignee_id: int, actor_id: int, new_task: bool = False) -> None:
        pass

    @abstractmethod
    def task_created(self, task: TaskEntity, manager_id: int, actor_id: int) -> None:
        """Powiadamia managera projektu o nowym zadaniu."""
        pass
