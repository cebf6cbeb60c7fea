# apps/tasks/domain/exceptions.py


class TaskNotFound(Exception):
    pass


class TransitionBlocked(Exception):
    """Zmiana statusu zablokowana przez niedokończone zależności/podzadania."""

    def __init__(self, message, blocking_titles=None):
        super().__init__(message)
        self.blocking_titles = list(blocking_titles or [])
