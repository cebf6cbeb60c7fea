import logging

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.milestones.models import Milestone
from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from apps.projects.models import Project

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Oznacza przeterminowane kamienie milowe i powiadamia managerów projektów'

    def handle(self, *args, **options):
        now = timezone.now()
        milestones = list(Milestone.objects.filter(
            status__in=Milestone.OPEN_STATUSES,
            due_date__lt=now
        ))

        service = NotificationService()
        for milestone in milestones:
            milestone.status = Milestone.Status.OVERDUE
            milestone.save(update_fields=['status'])

            # Projekt mógł zostać usunięty (brak kaskady)
            project = Project.objects.filter(id=milestone.project_id).first()
            if project is None:
                continue

            service.notify(
                project.manager_id,
                Notification.Type.OVERDUE_ALERT,
                "Milestone Overdue",
                f'Milestone "{milestone.title}" in project "{project.title}" is overdue.',
                link=f"/projects/{project.id}",
            )

        logger.info("Marked %s milestones as overdue", len(milestones))
        self.stdout.write(self.style.SUCCESS(f'Oznaczono {len(milestones)} kamieni milowych jako przeterminowane.'))
        for m in milestones:
            self.stdout.write(f"- {m.title} ({m.due_date})")
