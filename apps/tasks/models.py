# apps/tasks/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone
from apps.tasks.domain.entities import TaskStatus


class Task(models.Model):
    # Używamy TextChoices dla wygody w Adminie, ale mapujemy to na Enum domenowy
    class StatusChoices(models.TextChoices):
        TODO = TaskStatus.TODO.value, 'To Do'
        IN_PROGRESS = TaskStatus.IN_PROGRESS.value, 'In Progress'
        REVIEW = TaskStatus.REVIEW.value, 'Review'
        DONE = TaskStatus.DONE.value, 'Done'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'
        CRITICAL = 'critical', 'Critical'

    class Type(models.TextChoices):
        TASK = 'task', 'Task'
        BUG = 'bug', 'Bug'
        FEATURE = 'feature', 'Feature'

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Usunięcie projektu NIE usuwa zadań (zostają osierocone)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='tasks'
    )
    milestone = models.ForeignKey(
        'milestones.Milestone',
        null=True, blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='tasks'
    )

    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.TODO
    )
    priority = models.CharField(max_length=20, choices=Priority.choices, default=Priority.MEDIUM)
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.TASK)

    assignees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='assigned_tasks'
    )
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='reported_tasks'
    )

    # Czas
    due_date = models.DateTimeField(null=True, blank=True)
    estimated_hours = models.FloatField(null=True, blank=True)
    actual_hours = models.FloatField(default=0)

    # Podzadania: "subtasks" to zadania, których parent_task wskazuje na mnie
    parent_task = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='subtasks'
    )

    # "dependencies" oznacza "ja zależę od tych zadań"
    # "dependents" (related_name) oznacza "te zadania czekają na mnie"
    dependencies = models.ManyToManyField(
        'self',
        symmetrical=False,
        related_name='dependents',
        blank=True
    )

    tags = models.JSONField(default=list, blank=True)
    order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', '-created_at']

    def __str__(self):
        return self.title

    @property
    def is_done(self):
        return self.status == TaskStatus.DONE.value

    @property
    def is_overdue(self):
        return not self.is_done and self.due_date is not None and self.due_date < timezone.now()


class TaskHistory(models.Model):
    """Niezmienny wpis audytu; dopisywany przy każdej zmianie śledzonego pola."""
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='history')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='+'
    )
    action = models.CharField(max_length=20)  # 'updated', 'status_change'
    field = models.CharField(max_length=50)
    old_value = models.JSONField(null=True, blank=True)
    new_value = models.JSONField(null=True, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['timestamp', 'id']
        verbose_name_plural = 'task history'

    def __str__(self):
        return f"{self.task_id}: {self.field} ({self.action})"


class TaskComment(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='task_comments'
    )
    text = models.TextField()
    # Wątki: odpowiedź wskazuje na komentarz nadrzędny
    parent_comment = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='replies'
    )
    mentions = models.ManyToManyField(settings.AUTH_USER_MODEL, blank=True, related_name='+')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.text[:50]
