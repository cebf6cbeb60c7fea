"""
Tests for the notification endpoints.
"""
import pytest

from apps.notifications.models import Notification
from apps.notifications.services import NotificationService

pytestmark = pytest.mark.django_db


@pytest.fixture
def notify():
    service = NotificationService()

    def factory(recipient, title="Ping"):
        return service.notify(recipient.id, Notification.Type.PROJECT_UPDATE, title, "message")

    return factory


class TestNotifications:
    def test_list_returns_latest_twenty(self, api, member, notify):
        for i in range(25):
            notify(member, title=f"n{i}")

        data = api.as_user(member).get('/api/notifications/').json()['data']

        assert len(data) == 20
        assert data[0]['title'] == "n24"

    def test_unread_count_and_mark_read(self, api, member, notify):
        first = notify(member)
        notify(member)
        client = api.as_user(member)

        assert client.get('/api/notifications/unread-count/').json()['data'] == 2

        response = client.put(f'/api/notifications/{first.id}/read/')
        assert response.json()['data']['is_read'] is True
        assert client.get('/api/notifications/unread-count/').json()['data'] == 1

    def test_only_recipient_can_mark_read(self, api, member, other_member, notify):
        note = notify(member)

        response = api.as_user(other_member).put(f'/api/notifications/{note.id}/read/')

        assert response.status_code == 403
        note.refresh_from_db()
        assert note.is_read is False

    def test_mark_all_read(self, api, member, other_member, notify):
        notify(member)
        notify(member)
        untouched = notify(other_member)

        response = api.as_user(member).put('/api/notifications/mark-all-read/')

        assert response.json()['message'] == "All notifications marked as read"
        assert not Notification.objects.filter(recipient=member, is_read=False).exists()
        untouched.refresh_from_db()
        assert untouched.is_read is False
