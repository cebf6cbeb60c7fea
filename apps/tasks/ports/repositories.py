# apps/tasks/ports/repositories.py
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from apps.tasks.domain.entities import HistoryEntry, TaskEntity


class ITaskRepository(ABC):
    @abstractmethod
    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        pass

    @abstractmethod
    def get_many(self, task_ids: Iterable[int]) -> List[TaskEntity]:
        """Zwraca istniejące zadania o podanych ID (brakujące są pomijane)."""
        pass

    @abstractmethod
    def get_subtasks(self, parent_id: int) -> List[TaskEntity]:
        """Zwraca zadania, których parent_task wskazuje na parent_id."""
        pass

    @abstractmethod
    def save(self, task: TaskEntity) -> TaskEntity:
        """Zapisuje (tworzy lub aktualizuje) zadanie i zwraca zaktualizowaną encję (np. z ID)."""
        pass

    @abstractmethod
    def append_history(self, task_id: int, entries: List[HistoryEntry]) -> None:
        pass

    @abstractmethod
    def get_project_manager_id(self, project_id: int) -> Optional[int]:
        pass
