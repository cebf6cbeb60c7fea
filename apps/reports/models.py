# apps/reports/models.py
from django.db import models
from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType


class ActivityLog(models.Model):
    # Kto?
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    organization = models.ForeignKey(
        'core.Organization',
        on_delete=models.CASCADE,
        related_name='activity'
    )
    project = models.ForeignKey(
        'projects.Project',
        null=True, blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='+'
    )

    # Co zrobił? (Typ akcji)
    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'
        DELETED = 'deleted', 'Deleted'
        ASSIGNED = 'assigned', 'Assigned'
        STATUS_CHANGE = 'status_change', 'Status Change'
        COMMENTED = 'commented', 'Commented'
        LOGIN = 'login', 'Login'

    action = models.CharField(max_length=20, choices=Action.choices)

    # Na czym? (Generic Relation). Obiekt może już nie istnieć (DELETED).
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    content_object = GenericForeignKey('content_type', 'object_id')

    # Metadane (JSON - np. {"fields": ["status"], "old_status": "todo"})
    details = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['content_type', 'object_id']),
            models.Index(fields=['organization', 'created_at']),
        ]

    def __str__(self):
        return f"{self.user} - {self.action} - {self.created_at}"

    @property
    def target_type(self):
        # project / task / user / organization / timesheet
        return self.content_type.model
