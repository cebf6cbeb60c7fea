# apps/timesheets/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_HOURS = 0.25
MAX_HOURS = 24


class Timesheet(models.Model):
    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        SUBMITTED = 'submitted', 'Submitted'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='timesheets'
    )
    # Usunięcie projektu/zadania nie usuwa wpisów czasu
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='timesheets'
    )
    task = models.ForeignKey(
        'tasks.Task',
        null=True, blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='timesheets'
    )

    date = models.DateField()
    hours = models.FloatField(validators=[MinValueValidator(MIN_HOURS), MaxValueValidator(MAX_HOURS)])
    description = models.TextField(blank=True)
    billable = models.BooleanField(default=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='approved_timesheets'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.user} - {self.date} ({self.hours}h)"
