"""
Error taxonomy shared by the request pipeline and the controllers.
"""

from typing import Optional


class ApiError(Exception):
    """Base class for every failed remote call"""

    kind = "api"

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class BusinessError(ApiError):
    """Envelope code outside {0, 200}"""

    kind = "business"


class HttpStatusError(ApiError):
    """Non-2xx HTTP status"""

    kind = "http"


class AuthenticationError(HttpStatusError):
    """401 - credential missing, expired or revoked"""

    kind = "unauthenticated"


class PermissionDeniedError(HttpStatusError):
    """403"""

    kind = "forbidden"


class NotFoundError(HttpStatusError):
    """404"""

    kind = "not_found"


class RateLimitError(HttpStatusError):
    """429"""

    kind = "rate_limited"


class ServerError(HttpStatusError):
    """5xx"""

    kind = "server"


class NetworkError(ApiError):
    """No HTTP status available: connection failure, timeout, protocol error"""

    kind = "network"


class InvalidResponseError(ApiError):
    """2xx response whose body is not a {code, message, data} envelope"""

    kind = "invalid_response"


_STATUS_ERRORS = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    429: RateLimitError,
}


def error_class_for_status(status: int) -> type:
    """Map an HTTP status to its error class"""
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status]
    if 500 <= status < 600:
        return ServerError
    return HttpStatusError


class ControllerStateError(Exception):
    """A controller operation was invoked in a state that does not allow it"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoActiveSessionError(ControllerStateError):
    def __init__(self, message: str = "No active session"):
        super().__init__(message)


class NoActiveQuizError(ControllerStateError):
    def __init__(self, message: str = "No active quiz"):
        super().__init__(message)


class OperationInProgressError(ControllerStateError):
    pass
