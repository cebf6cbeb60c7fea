from apps.core.serializers import isoformat


def serialize_notification(notification):
    return {
        'id': notification.id,
        'recipient': notification.recipient_id,
        'sender': notification.sender_id,
        'type': notification.type,
        'title': notification.title,
        'message': notification.message,
        'link': notification.link,
        'is_read': notification.is_read,
        'created_at': isoformat(notification.created_at),
    }
