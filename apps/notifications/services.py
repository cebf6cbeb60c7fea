# apps/notifications/services.py
import logging

from .models import Notification

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class NotificationService:
    """Synchroniczne tworzenie powiadomień (fan-out z projektów i zadań)."""

    def notify(self, recipient_id, notification_type, title, message, sender_id=None, link=""):
        notification = Notification.objects.create(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=notification_type,
            title=title,
            message=message,
            link=link,
        )
        logger.debug("Notification %s (%s) -> user %s", notification.id, notification_type, recipient_id)
        return notification

    def recent_for(self, user, limit=RECENT_LIMIT):
        return list(Notification.objects.filter(recipient=user)[:limit])

    def unread_count(self, user):
        return Notification.objects.filter(recipient=user, is_read=False).count()

    def mark_all_read(self, user):
        return Notification.objects.filter(recipient=user, is_read=False).update(is_read=True)
