"""
Tests for the task endpoints: create, update lifecycle, delete and comments.
"""
import pytest

from apps.milestones.models import Milestone
from apps.notifications.models import Notification
from apps.reports.models import ActivityLog
from apps.tasks.models import Task, TaskComment, TaskHistory

pytestmark = pytest.mark.django_db


class TestCreateTask:
    """POST /api/tasks/"""

    def test_create_sets_reporter_and_notifies(self, api, admin, pm, member, project):
        response = api.as_user(admin).post('/api/tasks/', {
            'title': "Landing page",
            'project': project.id,
            'assignees': [member.id, admin.id],
            'priority': 'high',
        })

        assert response.status_code == 201
        data = response.json()['data']
        assert data['reporter']['id'] == admin.id
        assert data['status'] == 'todo'
        assert data['priority'] == 'high'
        assert sorted(a['id'] for a in data['assignees']) == sorted([member.id, admin.id])

        assigned = Notification.objects.get(recipient=member)
        assert assigned.type == Notification.Type.TASK_ASSIGNMENT
        assert assigned.title == "New Task Assigned"
        assert assigned.message == 'Task "Landing page" has been assigned to you in project "Website"'
        assert not Notification.objects.filter(recipient=admin).exists()

        manager_note = Notification.objects.get(recipient=pm)
        assert manager_note.type == Notification.Type.PROJECT_UPDATE
        assert manager_note.title == "New Task Created"

        assert ActivityLog.objects.filter(action=ActivityLog.Action.CREATED, object_id=data['id']).exists()

    def test_create_requires_project(self, api, member):
        response = api.as_user(member).post('/api/tasks/', {'title': "Orphan"})

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': "Please provide a project"}

    def test_create_in_unknown_project_is_404(self, api, member):
        response = api.as_user(member).post('/api/tasks/', {'title': "Lost", 'project': 9999})

        assert response.status_code == 404
        assert response.json()['success'] is False

    def test_create_without_title_is_400(self, api, member, project):
        response = api.as_user(member).post('/api/tasks/', {'project': project.id})

        assert response.status_code == 400
        assert 'title' in response.json()['message']

    def test_requires_authentication(self, api, project):
        response = api.post('/api/tasks/', {'title': "Anon", 'project': project.id})

        assert response.status_code == 401
        assert response.json()['message'] == "Not authorized, no token"


class TestUpdateTask:
    """PUT /api/tasks/<id>/ and its side effects."""

    def test_incomplete_dependency_rejects_whole_update(self, api, member, make_task):
        dep = make_task("Design mockups")
        task = make_task("Build page")
        task.dependencies.add(dep)

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {
            'status': 'done',
            'title': "Renamed",
        })

        assert response.status_code == 400
        assert response.json()['message'] == (
            "Cannot complete task. Prerequisite tasks are incomplete: Design mockups"
        )
        task.refresh_from_db()
        assert task.title == "Build page"
        assert task.status == 'todo'
        assert not TaskHistory.objects.filter(task=task).exists()
        assert not Notification.objects.exists()

    def test_start_blocked_then_allowed_after_dependency_done(self, api, member, make_task):
        dep = make_task("Get API keys")
        task = make_task("Integrate payments")
        task.dependencies.add(dep)
        client = api.as_user(member)

        blocked = client.put(f'/api/tasks/{task.id}/', {'status': 'in_progress'})
        assert blocked.status_code == 400
        assert blocked.json()['message'] == "Cannot start task. Dependencies are incomplete: Get API keys"

        assert client.put(f'/api/tasks/{dep.id}/', {'status': 'done'}).status_code == 200

        response = client.put(f'/api/tasks/{task.id}/', {'status': 'in_progress'})
        assert response.status_code == 200
        assert response.json()['data']['status'] == 'in_progress'

        entry = TaskHistory.objects.get(task=task)
        assert entry.action == 'status_change'
        assert entry.field == 'status'
        assert (entry.old_value, entry.new_value) == ('todo', 'in_progress')
        assert entry.user_id == member.id

    def test_open_subtask_blocks_parent_completion(self, api, pm, make_task):
        parent = make_task("Release")
        make_task("Changelog", parent_task=parent)

        response = api.as_user(pm).put(f'/api/tasks/{parent.id}/', {'status': 'done'})

        assert response.status_code == 400
        assert response.json()['message'] == (
            "Cannot complete parent task. 1 sub-tasks are still open: Changelog"
        )

    def test_each_changed_field_gets_one_history_entry(self, api, member, make_task):
        task = make_task("Old title", priority='low', description="same")

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {
            'title': "New title",
            'priority': 'high',
            'description': "same",
            'order': 4,
        })

        assert response.status_code == 200
        history = {h.field: h for h in TaskHistory.objects.filter(task=task)}
        assert set(history) == {'title', 'priority'}
        assert (history['title'].old_value, history['title'].new_value) == ("Old title", "New title")
        assert (history['priority'].old_value, history['priority'].new_value) == ('low', 'high')
        assert all(h.action == 'updated' for h in history.values())

        task.refresh_from_db()
        assert task.order == 4

    def test_status_change_notifies_reporter(self, api, pm, member, make_task):
        task = make_task("Build page", reporter=pm)

        api.as_user(member).put(f'/api/tasks/{task.id}/', {'status': 'in_progress'})

        note = Notification.objects.get(recipient=pm)
        assert note.type == Notification.Type.PROJECT_UPDATE
        assert note.title == "Task Status Updated"
        assert note.message == "Build page is now in progress"
        assert note.link == f"/tasks/{task.id}"
        assert ActivityLog.objects.filter(action=ActivityLog.Action.STATUS_CHANGE, object_id=task.id).exists()

    def test_assignee_change_notifies_listed_assignees_except_actor(self, api, admin, member, other_member, make_task):
        task = make_task("Build page")
        task.assignees.add(member)

        response = api.as_user(admin).put(f'/api/tasks/{task.id}/', {
            'assignees': [member.id, other_member.id, admin.id],
        })

        assert response.status_code == 200
        recipients = set(
            Notification.objects.filter(type=Notification.Type.TASK_ASSIGNMENT).values_list('recipient_id', flat=True)
        )
        assert recipients == {member.id, other_member.id}

        entry = TaskHistory.objects.get(task=task, field='assignees')
        assert entry.old_value == [member.id]
        assert entry.new_value == sorted([member.id, other_member.id, admin.id])

    def test_done_task_reopens_to_in_progress(self, api, pm, member, make_task):
        dep = make_task("Design mockups", status='done')
        task = make_task("Build page", status='done', reporter=pm)
        task.dependencies.add(dep)

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {'status': 'in_progress'})

        assert response.status_code == 200
        assert response.json()['data']['status'] == 'in_progress'
        entry = TaskHistory.objects.get(task=task)
        assert entry.action == 'status_change'
        assert (entry.old_value, entry.new_value) == ('done', 'in_progress')

        note = Notification.objects.get(recipient=pm)
        assert note.title == "Task Status Updated"
        assert note.message == "Build page is now in progress"

    def test_reopen_blocked_after_dependency_reopened(self, api, member, make_task):
        dep = make_task("Design mockups", status='done')
        task = make_task("Build page", status='done')
        task.dependencies.add(dep)
        client = api.as_user(member)

        assert client.put(f'/api/tasks/{dep.id}/', {'status': 'in_progress'}).status_code == 200

        response = client.put(f'/api/tasks/{task.id}/', {'status': 'in_progress'})

        assert response.status_code == 400
        assert response.json()['message'] == "Cannot start task. Dependencies are incomplete: Design mockups"
        task.refresh_from_db()
        assert task.status == 'done'
        assert not TaskHistory.objects.filter(task=task).exists()

    def test_task_cannot_depend_on_itself(self, api, member, make_task):
        task = make_task("Loop")

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {'dependencies': [task.id]})

        assert response.status_code == 400
        assert "cannot depend on itself" in response.json()['message']

    def test_invalid_status_is_rejected(self, api, member, make_task):
        task = make_task("Build page")

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {'status': 'archived'})

        assert response.status_code == 400

    def test_task_from_other_organization_is_404(self, api, make_user, other_organization, make_task):
        outsider = make_user(organization=other_organization)
        task = make_task("Secret")

        assert api.as_user(outsider).put(f'/api/tasks/{task.id}/', {'title': "x"}).status_code == 404


class TestListAndDetail:
    """GET endpoints."""

    def test_filters(self, api, member, project, make_task):
        make_task("A", status='done')
        todo = make_task("B")
        todo.assignees.add(member)

        client = api.as_user(member)
        done = client.get('/api/tasks/', {'status': 'done'}).json()
        mine = client.get('/api/tasks/', {'assignee': member.id}).json()
        per_project = client.get(f'/api/projects/{project.id}/tasks/').json()

        assert [t['title'] for t in done['data']] == ["A"]
        assert [t['title'] for t in mine['data']] == ["B"]
        assert per_project['count'] == 2

    def test_detail_includes_history_comments_and_subtasks(self, api, member, make_task):
        parent = make_task("Release")
        make_task("Changelog", parent_task=parent)
        TaskComment.objects.create(task=parent, user=member, text="On it")

        data = api.as_user(member).get(f'/api/tasks/{parent.id}/').json()['data']

        assert [s['title'] for s in data['subtasks']] == ["Changelog"]
        assert [c['text'] for c in data['comments']] == ["On it"]
        assert data['history'] == []


class TestDeleteTask:
    """DELETE /api/tasks/<id>/"""

    def test_delete_leaves_subtasks_orphaned(self, api, pm, member, make_task):
        parent = make_task("Release")
        sub = make_task("Changelog", parent_task=parent)
        TaskComment.objects.create(task=parent, user=member, text="note")

        response = api.as_user(pm).delete(f'/api/tasks/{parent.id}/')

        assert response.status_code == 200
        assert not Task.objects.filter(id=parent.id).exists()
        sub.refresh_from_db()
        assert sub.parent_task_id == parent.id
        assert not TaskComment.objects.filter(task_id=parent.id).exists()

    def test_orphaned_subtask_stays_editable(self, api, pm, member, make_task):
        parent = make_task("Release")
        sub = make_task("Changelog", parent_task=parent)
        api.as_user(pm).delete(f'/api/tasks/{parent.id}/')

        response = api.as_user(member).put(f'/api/tasks/{sub.id}/', {'status': 'review'})

        assert response.status_code == 200
        data = response.json()['data']
        assert data['status'] == 'review'
        assert data['parent_task'] == parent.id
        sub.refresh_from_db()
        assert sub.status == 'review'
        assert sub.parent_task_id == parent.id

    def test_task_of_deleted_milestone_stays_editable(self, api, pm, member, project, make_task):
        milestone = Milestone.objects.create(title="Beta", project=project)
        task = make_task("Build page", milestone=milestone)
        assert api.as_user(pm).delete(f'/api/milestones/{milestone.id}/').status_code == 200

        response = api.as_user(member).put(f'/api/tasks/{task.id}/', {'title': "Renamed"})

        assert response.status_code == 200
        task.refresh_from_db()
        assert task.title == "Renamed"
        assert task.milestone_id == milestone.id

    def test_pointing_at_deleted_parent_is_still_rejected(self, api, pm, member, make_task):
        parent = make_task("Release")
        sub = make_task("Changelog")
        parent_id = parent.id
        api.as_user(pm).delete(f'/api/tasks/{parent_id}/')

        response = api.as_user(member).put(f'/api/tasks/{sub.id}/', {'parent_task': parent_id})

        assert response.status_code == 400
        assert 'parent_task' in response.json()['message']

    def test_member_cannot_delete_someone_elses_task(self, api, member, make_task):
        task = make_task("Not mine")

        assert api.as_user(member).delete(f'/api/tasks/{task.id}/').status_code == 403

    def test_reporter_can_delete_own_task(self, api, member, make_task):
        task = make_task("Mine", reporter=member)

        assert api.as_user(member).delete(f'/api/tasks/{task.id}/').status_code == 200


class TestComments:
    """POST /api/tasks/<id>/comments/"""

    def test_reply_and_mention_notifications(self, api, pm, member, other_member, admin, make_task):
        task = make_task("Build page")
        parent = TaskComment.objects.create(task=task, user=pm, text="Any update?")

        response = api.as_user(member).post(f'/api/tasks/{task.id}/comments/', {
            'text': "Almost done",
            'parent_comment': parent.id,
            'mentions': [other_member.id, member.id],
        })

        assert response.status_code == 201
        assert response.json()['data']['parent_comment'] == parent.id

        reply = Notification.objects.get(type=Notification.Type.COMMENT_REPLY)
        assert reply.recipient_id == pm.id
        mentions = Notification.objects.filter(type=Notification.Type.MENTION)
        assert [n.recipient_id for n in mentions] == [other_member.id]

    def test_empty_comment_rejected(self, api, member, make_task):
        task = make_task("Build page")

        response = api.as_user(member).post(f'/api/tasks/{task.id}/comments/', {'text': "  "})

        assert response.status_code == 400
