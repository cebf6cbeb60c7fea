from django.conf import settings
from django.db import models


class Discussion(models.Model):
    """Wiadomość w dyskusji projektu."""
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='discussions'
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='discussion_messages'
    )
    content = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.content[:50]
