# apps/reports/domain/services.py
from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from django.utils import timezone

from apps.core.serializers import isoformat, serialize_user_brief
from apps.milestones.models import Milestone
from apps.notifications.serializers import serialize_notification
from apps.notifications.services import NotificationService
from apps.projects.models import Project
from apps.reports.models import ActivityLog
from apps.tasks.domain.entities import TaskStatus
from apps.tasks.models import Task
from apps.timesheets.models import Timesheet

DONE = TaskStatus.DONE.value
RECENT_ACTIVITY_LIMIT = 10
UPCOMING_DEADLINES_LIMIT = 5


def percent(part, whole, empty=0):
    """Procent zaokrąglony jak Math.round (.5 w górę)."""
    if not whole:
        return empty
    return int(part * 100 / whole + 0.5)


def milestone_stats(milestones):
    return milestones.aggregate(
        completed=Count('id', filter=Q(status=Milestone.Status.COMPLETED)),
        pending=Count('id', filter=Q(status__in=Milestone.OPEN_STATUSES)),
        overdue=Count('id', filter=Q(status=Milestone.Status.OVERDUE)),
    )


def serialize_activity(log):
    return {
        'id': log.id,
        'user': serialize_user_brief(log.user),
        'action': log.action,
        'target_type': log.target_type,
        'target_id': log.object_id,
        'project': log.project_id,
        'details': log.details,
        'created_at': isoformat(log.created_at),
    }


class DashboardService:
    """Statystyki liczone na żywo dla dashboardów poszczególnych ról."""

    def __init__(self, notifications: NotificationService = None):
        self.notifications = notifications or NotificationService()

    def _latest_notifications(self, user):
        return [serialize_notification(n) for n in self.notifications.recent_for(user)]

    def admin_stats(self, user):
        now = timezone.now()
        projects = Project.objects.filter(organization_id=user.organization_id)
        project_ids = list(projects.values_list('id', flat=True))

        project_counts = projects.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(status=Project.Status.ACTIVE)),
            completed=Count('id', filter=Q(status=Project.Status.COMPLETED)),
        )

        users = get_user_model().objects.filter(organization_id=user.organization_id)
        by_role = users.values('role').annotate(count=Count('id')).order_by('role')

        # Zdrowie: % niezamkniętych zadań, które nie są po terminie
        open_tasks = Task.objects.filter(project_id__in=project_ids).exclude(status=DONE)
        open_count = open_tasks.count()
        overdue_count = open_tasks.filter(due_date__lt=now).count()

        activity = ActivityLog.objects.filter(
            organization_id=user.organization_id
        ).select_related('user', 'content_type')[:RECENT_ACTIVITY_LIMIT]

        return {
            'projects': project_counts,
            'users': {
                'total': users.count(),
                'by_role': [{'role': r['role'], 'count': r['count']} for r in by_role],
            },
            'health': {
                'on_track_percent': percent(open_count - overdue_count, open_count, empty=100),
                'overdue_tasks': overdue_count,
            },
            'milestones': milestone_stats(Milestone.objects.filter(project_id__in=project_ids)),
            'recent_activity': [serialize_activity(a) for a in activity],
            'notifications': self._latest_notifications(user),
        }

    def pm_stats(self, user):
        now = timezone.now()
        projects = Project.objects.filter(
            Q(manager=user) | Q(members=user),
            organization_id=user.organization_id
        ).distinct()
        project_ids = list(projects.values_list('id', flat=True))

        tasks = Task.objects.filter(project_id__in=project_ids)
        task_counts = tasks.aggregate(
            total=Count('id'),
            completed=Count('id', filter=Q(status=DONE)),
            overdue=Count('id', filter=Q(due_date__lt=now) & ~Q(status=DONE)),
        )

        # Obciążenie zespołu: liczba zadań na osobę przypisaną
        workload = (
            tasks.exclude(assignees=None)
            .values('assignees__id', 'assignees__name')
            .annotate(count=Count('id'))
            .order_by('-count', 'assignees__name')
        )

        pending_approvals = Timesheet.objects.filter(
            project_id__in=project_ids,
            status=Timesheet.Status.SUBMITTED
        ).count()

        return {
            'projects': len(project_ids),
            'progress_percent': percent(task_counts['completed'], task_counts['total']),
            'overdue_tasks': task_counts['overdue'],
            'workload': [
                {'user': w['assignees__id'], 'name': w['assignees__name'], 'count': w['count']}
                for w in workload
            ],
            'milestones': milestone_stats(Milestone.objects.filter(project_id__in=project_ids)),
            'pending_approvals': pending_approvals,
            'notifications': self._latest_notifications(user),
        }

    def member_stats(self, user):
        now = timezone.now()
        assigned = Task.objects.filter(assignees=user)
        open_tasks = assigned.exclude(status=DONE)

        upcoming = list(
            open_tasks.filter(due_date__gte=now).order_by('due_date')[:UPCOMING_DEADLINES_LIMIT]
        )
        # Bez JOIN: projekt mógł zostać usunięty
        project_titles = {
            p.id: p.title
            for p in Project.objects.filter(id__in={t.project_id for t in upcoming})
        }

        logged = Timesheet.objects.filter(user=user).aggregate(total=Sum('hours'))['total']

        return {
            'total_tasks': assigned.count(),
            'completed_tasks': assigned.filter(status=DONE).count(),
            'overdue_tasks': open_tasks.filter(due_date__lt=now).count(),
            'upcoming_deadlines': [
                {
                    'id': t.id,
                    'title': t.title,
                    'status': t.status,
                    'priority': t.priority,
                    'due_date': isoformat(t.due_date),
                    'project': {'id': t.project_id, 'title': project_titles.get(t.project_id)},
                }
                for t in upcoming
            ],
            'logged_hours': logged or 0,
            'notifications': self._latest_notifications(user),
        }


class AnalyticsService:
    """Analityka w obrębie organizacji użytkownika."""

    def _projects(self, user):
        return Project.objects.filter(organization_id=user.organization_id)

    def _tasks(self, user):
        return Task.objects.filter(project__organization_id=user.organization_id)

    def project_progress(self, user):
        projects = self._projects(user).annotate(
            total_tasks=Count('tasks'),
            completed_tasks=Count('tasks', filter=Q(tasks__status=DONE)),
        ).order_by('title')

        return [
            {
                'id': p.id,
                'title': p.title,
                'status': p.status,
                'start_date': isoformat(p.start_date),
                'end_date': isoformat(p.end_date),
                'total_tasks': p.total_tasks,
                'completed_tasks': p.completed_tasks,
                'progress': percent(p.completed_tasks, p.total_tasks),
            }
            for p in projects
        ]

    def task_completion(self, user):
        stats = {status.value: 0 for status in TaskStatus}
        for row in self._tasks(user).values('status').annotate(count=Count('id')):
            if row['status'] in stats:
                stats[row['status']] = row['count']
        return stats

    def time_utilization(self, user):
        projects = list(self._projects(user).order_by('title'))
        ids = [p.id for p in projects]

        # Osobne agregacje: dwa JOIN-y w jednym zapytaniu mnożyłyby sumy
        estimated = dict(
            Task.objects.filter(project_id__in=ids)
            .values('project_id').annotate(total=Sum('estimated_hours'))
            .values_list('project_id', 'total')
        )
        actual = dict(
            Timesheet.objects.filter(project_id__in=ids)
            .values('project_id').annotate(total=Sum('hours'))
            .values_list('project_id', 'total')
        )

        return [
            {
                'id': p.id,
                'title': p.title,
                'estimated': estimated.get(p.id) or 0,
                'actual': actual.get(p.id) or 0,
            }
            for p in projects
        ]

    def overdue_vs_completed(self, user):
        return self._tasks(user).aggregate(
            completed=Count('id', filter=Q(status=DONE)),
            overdue=Count('id', filter=Q(due_date__lt=timezone.now()) & ~Q(status=DONE)),
        )
