"""
Transport infrastructure - request pipeline, response envelope and error taxonomy.
"""

from .envelope import ApiModel, Envelope, SUCCESS_CODES
from .errors import (
    ApiError,
    BusinessError,
    HttpStatusError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    RateLimitError,
    ServerError,
    NetworkError,
    InvalidResponseError,
    ControllerStateError,
    NoActiveSessionError,
    NoActiveQuizError,
    OperationInProgressError
)
from .pipeline import RequestPipeline, FALLBACK_MESSAGE, SESSION_EXPIRED_MESSAGE, MALFORMED_MESSAGE

__all__ = [
    'ApiModel',
    'Envelope',
    'SUCCESS_CODES',
    'ApiError',
    'BusinessError',
    'HttpStatusError',
    'AuthenticationError',
    'PermissionDeniedError',
    'NotFoundError',
    'RateLimitError',
    'ServerError',
    'NetworkError',
    'InvalidResponseError',
    'ControllerStateError',
    'NoActiveSessionError',
    'NoActiveQuizError',
    'OperationInProgressError',
    'RequestPipeline',
    'FALLBACK_MESSAGE',
    'SESSION_EXPIRED_MESSAGE',
    'MALFORMED_MESSAGE'
]
