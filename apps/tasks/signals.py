# apps/tasks/signals.py
from django.db.models.signals import post_save
from django.dispatch import receiver
from apps.reports.services import ActivityLogger
from apps.reports.models import ActivityLog
from .models import Task


@receiver(post_save, sender=Task)
def log_task_created(sender, instance, created, **kwargs):
    """
    Utworzenie zadania trafia do dziennika aktywności organizacji.
    Zmiany (UPDATED / STATUS_CHANGE) loguje widok, bo tylko on zna listę zmienionych pól.
    """
    if not created:
        return

    ActivityLogger.log(
        instance.reporter, instance,
        ActivityLog.Action.CREATED,
        project=instance.project,
        details={'title': instance.title}
    )
