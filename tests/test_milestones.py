"""
Tests for milestone endpoints and the overdue management command.
"""
from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.core.models import Role
from apps.milestones.models import Milestone
from apps.notifications.models import Notification
from apps.reports.models import ActivityLog

pytestmark = pytest.mark.django_db


class TestMilestoneEndpoints:
    def test_create_and_list_ordered_by_due_date(self, api, team_lead, member, project):
        client = api.as_user(team_lead)
        late = client.post(f'/api/projects/{project.id}/milestones/', {
            'title': "GA", 'due_date': "2026-09-01T00:00:00Z",
        })
        early = client.post(f'/api/projects/{project.id}/milestones/', {
            'title': "Beta", 'due_date': "2026-06-01T00:00:00Z",
        })

        assert late.status_code == 201
        assert ActivityLog.objects.filter(
            action=ActivityLog.Action.CREATED, object_id=late.json()['data']['id'], user=team_lead
        ).exists()
        assert early.json()['data']['status'] == 'upcoming'

        listed = api.as_user(member).get(f'/api/projects/{project.id}/milestones/').json()
        assert [m['title'] for m in listed['data']] == ["Beta", "GA"]

    def test_create_in_unknown_project_is_404(self, api, pm):
        response = api.as_user(pm).post('/api/projects/9999/milestones/', {'title': "Nope"})

        assert response.status_code == 404

    def test_member_cannot_create(self, api, member, project):
        response = api.as_user(member).post(f'/api/projects/{project.id}/milestones/', {'title': "Nope"})

        assert response.status_code == 403

    def test_detail_and_update(self, api, pm, project):
        milestone = Milestone.objects.create(title="Beta", project=project)
        client = api.as_user(pm)

        detail = client.get(f'/api/milestones/{milestone.id}/').json()['data']
        assert detail['project'] == {'id': project.id, 'title': "Website"}

        response = client.put(f'/api/milestones/{milestone.id}/', {'status': 'active'})
        assert response.status_code == 200
        milestone.refresh_from_db()
        assert milestone.status == 'active'
        assert milestone.title == "Beta"

    def test_only_admin_or_project_manager_deletes(self, api, make_user, admin, project):
        other_pm = make_user(Role.PROJECT_MANAGER)
        milestone = Milestone.objects.create(title="Beta", project=project)

        assert api.as_user(other_pm).delete(f'/api/milestones/{milestone.id}/').status_code == 403
        assert api.as_user(admin).delete(f'/api/milestones/{milestone.id}/').status_code == 200
        assert not Milestone.objects.filter(id=milestone.id).exists()

        log = ActivityLog.objects.get(action=ActivityLog.Action.DELETED, object_id=milestone.id)
        assert log.user == admin
        assert log.project == project
        assert log.details == {'title': "Beta"}


class TestMarkOverdueCommand:
    def test_marks_past_due_open_milestones_and_alerts_manager(self, pm, project):
        past = timezone.now() - timedelta(days=1)
        overdue = Milestone.objects.create(title="Beta", project=project, due_date=past)
        done = Milestone.objects.create(
            title="Alpha", project=project, due_date=past, status=Milestone.Status.COMPLETED
        )
        future = Milestone.objects.create(
            title="GA", project=project, due_date=timezone.now() + timedelta(days=10)
        )

        out = StringIO()
        call_command('mark_overdue_milestones', stdout=out)

        overdue.refresh_from_db()
        done.refresh_from_db()
        future.refresh_from_db()
        assert overdue.status == Milestone.Status.OVERDUE
        assert done.status == Milestone.Status.COMPLETED
        assert future.status == Milestone.Status.UPCOMING

        alert = Notification.objects.get(recipient=pm)
        assert alert.type == Notification.Type.OVERDUE_ALERT
        assert "Beta" in alert.message
        assert "Beta" in out.getvalue()
