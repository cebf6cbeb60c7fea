# apps/notifications/models.py
from django.db import models
from django.conf import settings


class Notification(models.Model):
    class Type(models.TextChoices):
        TASK_ASSIGNMENT = 'task_assignment', 'Task Assignment'
        MENTION = 'mention', 'Mention'
        OVERDUE_ALERT = 'overdue_alert', 'Overdue Alert'
        PROJECT_UPDATE = 'project_update', 'Project Update'
        COMMENT_REPLY = 'comment_reply', 'Comment Reply'

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='sent_notifications'
    )
    type = models.CharField(max_length=30, choices=Type.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    link = models.CharField(max_length=255, blank=True)  # ścieżka do zasobu, np. /tasks/12
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', 'is_read']),
        ]

    def __str__(self):
        return f"{self.recipient} - {self.type} - {self.title}"
