from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required
from apps.core.exceptions import Forbidden
from apps.core.http import api_response
from .models import Notification
from .serializers import serialize_notification
from .services import NotificationService

LIST_LIMIT = 20


@api_login_required
@require_http_methods(["GET"])
def notification_list_view(request):
    notifications = NotificationService().recent_for(request.user, limit=LIST_LIMIT)
    return api_response([serialize_notification(n) for n in notifications])


@api_login_required
@require_http_methods(["GET"])
def unread_count_view(request):
    return api_response(NotificationService().unread_count(request.user))


@csrf_exempt
@api_login_required
@require_http_methods(["PUT"])
def mark_read_view(request, pk):
    notification = get_object_or_404(Notification, pk=pk)

    if notification.recipient_id != request.user.id:
        raise Forbidden("Not authorized")

    notification.is_read = True
    notification.save(update_fields=['is_read'])
    return api_response(serialize_notification(notification))


@csrf_exempt
@api_login_required
@require_http_methods(["PUT"])
def mark_all_read_view(request):
    NotificationService().mark_all_read(request.user)
    return api_response(message="All notifications marked as read")
