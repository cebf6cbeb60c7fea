# apps/core/middleware.py
import logging

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404, JsonResponse

from .auth import resolve_token, token_from_request
from .exceptions import ApiError

logger = logging.getLogger(__name__)

API_PREFIX = '/api/'


class TokenAuthenticationMiddleware:
    """
    Ustawia request.user na podstawie tokenu (nagłówek Bearer albo cookie).
    API nie korzysta z sesji Django, więc bez ważnego tokenu user jest anonimowy.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith(API_PREFIX):
            user = resolve_token(token_from_request(request))
            request.user = user or AnonymousUser()
        return self.get_response(request)


class ApiExceptionMiddleware:
    """Zamienia wyjątki z widoków API na JSON {"success": false, "message": ...}."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not request.path.startswith(API_PREFIX):
            return None

        if isinstance(exception, ApiError):
            status, message = exception.status_code, exception.message
        elif isinstance(exception, Http404):
            status, message = 404, str(exception) or "Resource not found"
        elif isinstance(exception, PermissionDenied):
            status, message = 403, str(exception) or "Access denied"
        elif isinstance(exception, ValidationError):
            status, message = 400, '; '.join(exception.messages)
        else:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            status, message = 500, "Server Error"

        if status < 500:
            logger.info("%s %s -> %s: %s", request.method, request.path, status, message)

        return JsonResponse({'success': False, 'message': message}, status=status)
