# apps/core/auth.py
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing


def issue_token(user):
    """Podpisany token z ID użytkownika (bez stanu po stronie serwera)."""
    return signing.dumps({'id': user.pk}, salt=settings.AUTH_TOKEN_SALT)


def resolve_token(token):
    """Zwraca aktywnego użytkownika dla tokenu albo None."""
    if not token:
        return None
    try:
        payload = signing.loads(
            token,
            salt=settings.AUTH_TOKEN_SALT,
            max_age=settings.AUTH_TOKEN_MAX_AGE
        )
    except signing.BadSignature:
        # SignatureExpired dziedziczy po BadSignature
        return None

    User = get_user_model()
    try:
        return User.objects.select_related('organization').get(pk=payload.get('id'), is_active=True)
    except User.DoesNotExist:
        return None


def token_from_request(request):
    header = request.META.get('HTTP_AUTHORIZATION', '')
    if header.lower().startswith('bearer '):
        return header.split(' ', 1)[1].strip()
    return request.COOKIES.get(settings.AUTH_TOKEN_COOKIE)


def set_token_cookie(response, token):
    response.set_cookie(
        settings.AUTH_TOKEN_COOKIE,
        token,
        max_age=settings.AUTH_TOKEN_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite='Lax',
    )
    return response
