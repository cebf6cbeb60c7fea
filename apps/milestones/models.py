# apps/milestones/models.py
from django.db import models
from django.utils import timezone


class Milestone(models.Model):
    class Status(models.TextChoices):
        UPCOMING = 'upcoming', 'Upcoming'
        ACTIVE = 'active', 'Active'
        COMPLETED = 'completed', 'Completed'
        OVERDUE = 'overdue', 'Overdue'

    # Statusy, które mogą jeszcze "przeterminować się"
    OPEN_STATUSES = (Status.UPCOMING, Status.ACTIVE)

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='milestones'
    )
    due_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UPCOMING)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['due_date', 'id']

    def __str__(self):
        return self.title

    @property
    def is_past_due(self):
        return (
            self.status in self.OPEN_STATUSES
            and self.due_date is not None
            and self.due_date < timezone.now()
        )
