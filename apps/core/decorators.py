# apps/core/decorators.py
from functools import wraps

from .exceptions import Forbidden, NotAuthenticated


def api_login_required(view_func):
    """Odpowiednik @login_required dla API: zamiast redirectu zwraca 401."""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            raise NotAuthenticated("Not authorized, no token")
        return view_func(request, *args, **kwargs)

    return wrapper


def role_required(*allowed_roles):
    """Statyczna lista ról dozwolonych dla danej trasy."""

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                raise NotAuthenticated("Not authorized, no user found")
            if request.user.role not in allowed_roles:
                raise Forbidden(f"Access denied. Required roles: {', '.join(allowed_roles)}")
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator
