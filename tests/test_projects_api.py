"""
Tests for the project endpoints and their role rules.
"""
import pytest

from apps.milestones.models import Milestone
from apps.notifications.models import Notification
from apps.projects.models import Project
from apps.tasks.models import Task
from apps.timesheets.models import Timesheet

pytestmark = pytest.mark.django_db


class TestCreateProject:
    """POST /api/projects/"""

    def test_pm_creates_project_with_defaults(self, api, pm, member, other_member, organization):
        response = api.as_user(pm).post('/api/projects/', {
            'title': "Mobile app",
            'description': "iOS and Android",
            'key': "mob",
            'members': [member.id, other_member.id, pm.id],
            'tags': ["mobile"],
        })

        assert response.status_code == 201
        data = response.json()['data']
        assert data['status'] == 'planning'
        assert data['priority'] == 'medium'
        assert data['key'] == 'MOB'
        assert data['manager']['id'] == pm.id
        assert data['organization'] == organization.id
        assert data['tags'] == ["mobile"]

        assert Notification.objects.get(recipient=pm).title == "Project Created"
        added = Notification.objects.filter(title="Added to Project")
        assert {n.recipient_id for n in added} == {member.id, other_member.id}

    def test_member_cannot_create(self, api, member):
        response = api.as_user(member).post('/api/projects/', {'title': "x", 'description': "y"})

        assert response.status_code == 403
        assert response.json()['message'] == "Access denied. Required roles: admin, project_manager, team_lead"

    def test_missing_description(self, api, team_lead):
        response = api.as_user(team_lead).post('/api/projects/', {'title': "No description"})

        assert response.status_code == 400

    def test_end_before_start(self, api, admin):
        response = api.as_user(admin).post('/api/projects/', {
            'title': "Backwards",
            'description': "d",
            'start_date': "2026-05-01",
            'end_date': "2026-04-01",
        })

        assert response.status_code == 400
        assert response.json()['message'] == "End date cannot be before start date"


class TestReadProjects:
    def test_list_is_organization_scoped(self, api, member, project, make_user, other_organization):
        outsider = make_user(organization=other_organization)

        assert api.as_user(member).get('/api/projects/').json()['count'] == 1
        assert api.as_user(outsider).get('/api/projects/').json()['count'] == 0
        assert api.as_user(outsider).get(f'/api/projects/{project.id}/').status_code == 404

    def test_detail_lists_members(self, api, member, project):
        data = api.as_user(member).get(f'/api/projects/{project.id}/').json()['data']

        assert [m['id'] for m in data['members']] == [member.id]


class TestUpdateProject:
    """PUT /api/projects/<id>/"""

    def test_manager_updates_selected_fields(self, api, pm, project):
        response = api.as_user(pm).put(f'/api/projects/{project.id}/', {'status': 'active'})

        assert response.status_code == 200
        project.refresh_from_db()
        assert project.status == 'active'
        assert project.title == "Website"

    def test_team_lead_who_is_not_manager_is_forbidden(self, api, team_lead, project):
        response = api.as_user(team_lead).put(f'/api/projects/{project.id}/', {'status': 'active'})

        assert response.status_code == 403

    def test_admin_may_update_any_project(self, api, admin, project):
        assert api.as_user(admin).put(f'/api/projects/{project.id}/', {'priority': 'urgent'}).status_code == 200


class TestDeleteProject:
    """DELETE /api/projects/<id>/"""

    def test_member_gets_403(self, api, member, project):
        response = api.as_user(member).delete(f'/api/projects/{project.id}/')

        assert response.status_code == 403
        assert response.json()['message'] == "Access denied. Required roles: admin, project_manager"

    def test_project_manager_cannot_delete(self, api, pm, project):
        response = api.as_user(pm).delete(f'/api/projects/{project.id}/')

        assert response.status_code == 403
        assert "Only admins can delete projects." in response.json()['message']
        assert Project.objects.filter(id=project.id).exists()

    def test_admin_delete_leaves_children_orphaned(self, api, admin, member, project, make_task):
        task = make_task("Build page")
        milestone = Milestone.objects.create(title="Beta", project=project)
        timesheet = Timesheet.objects.create(user=member, project=project, date="2026-01-05", hours=2)

        response = api.as_user(admin).delete(f'/api/projects/{project.id}/')

        assert response.status_code == 200
        assert not Project.objects.filter(id=project.id).exists()
        assert Task.objects.get(id=task.id).project_id == project.id
        assert Milestone.objects.filter(id=milestone.id).exists()
        assert Timesheet.objects.filter(id=timesheet.id).exists()
