# apps/core/exceptions.py


class ApiError(Exception):
    """Błąd zwracany klientowi jako {"success": false, "message": ...}."""
    status_code = 400
    default_message = "Bad request"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = 400
    default_message = "Bad request"


class NotAuthenticated(ApiError):
    status_code = 401
    default_message = "Not authorized, no token"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Access denied"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"
