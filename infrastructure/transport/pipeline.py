"""
Request pipeline - the single chokepoint for every outbound call.

Attaches the bearer credential, decodes the {code, message, data} envelope and
classifies failures. An authentication failure (HTTP 401) clears the stored
credential and is broadcast on the event bus so the composition root can
navigate to the login route.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from infrastructure.events import EventBus, UNAUTHENTICATED
from infrastructure.storage.credential_store import CredentialStore
from infrastructure.transport.envelope import Envelope
from infrastructure.transport.errors import (
    ApiError,
    AuthenticationError,
    BusinessError,
    InvalidResponseError,
    NetworkError,
    PermissionDeniedError,
    NotFoundError,
    RateLimitError,
    ServerError,
    error_class_for_status,
)
from utils.logging_config import ErrorTracker, get_logger, log_execution_time

FALLBACK_MESSAGE = "Network error"
SESSION_EXPIRED_MESSAGE = "Session expired, please login again"
MALFORMED_MESSAGE = "Malformed response from server"

M = TypeVar("M", bound=BaseModel)

# Fixed notice per classified failure; None means "use the best available message"
STATUS_NOTICES = {
    AuthenticationError: SESSION_EXPIRED_MESSAGE,
    PermissionDeniedError: "Access denied",
    NotFoundError: "Resource not found",
    RateLimitError: "Too many requests, please try again later",
    ServerError: "Server error, please try again later",
}


class RequestPipeline:
    """
    Async transport shared by every controller.

    Each call either returns the decoded ``data`` of a success envelope or
    raises an ``ApiError`` subclass carrying a human-readable message.
    """

    def __init__(
        self,
        base_url: str,
        credential_store: CredentialStore,
        events: Optional[EventBus] = None,
        notifier: Any = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        error_tracker: Optional[ErrorTracker] = None,
    ):
        """
        Args:
            base_url: Root URL of the remote service
            credential_store: Owner of the bearer token
            events: Bus receiving the ``unauthenticated`` event
            notifier: Object with ``error(msg)`` and ``warning(msg)`` for user notices
            timeout: Per-call budget in seconds; a timeout is a network failure
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
            error_tracker: Receives every classified failure
        """
        self.base_url = base_url.rstrip("/")
        self.credential_store = credential_store
        self.events = events or EventBus()
        self.notifier = notifier
        self.timeout = timeout
        self.logger = get_logger(__name__)
        self.error_tracker = error_tracker or ErrorTracker(get_logger("lingua.errors"))
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self.credential_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        # A short-lived client per call keeps the pipeline usable from any event loop
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one remote call and return the envelope's ``data``

        Raises:
            BusinessError: envelope code outside {0, 200}
            HttpStatusError: non-2xx status (subclass per status family)
            NetworkError: no status available (connection failure, timeout)
            InvalidResponseError: 2xx body that is not an envelope
        """
        method = method.upper()
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        context = f"{method} {path}"

        with log_execution_time(self.logger, context):
            try:
                async with self._client() as client:
                    response = await client.request(
                        method, path, json=json, params=params, headers=self._build_headers()
                    )
            except httpx.TimeoutException as e:
                self._fail(NetworkError(str(e) or "Request timed out"), context)
            except httpx.HTTPError as e:
                self._fail(NetworkError(str(e) or FALLBACK_MESSAGE), context)

            if response.is_error:
                self._fail(self._classify_status(response), context)

            envelope = self._decode(response)
            if envelope is None:
                self._fail(InvalidResponseError(MALFORMED_MESSAGE, status=response.status_code), context)

            if not envelope.is_success:
                message = envelope.message or "Request failed"
                self._fail(BusinessError(message, status=response.status_code, code=envelope.code), context)

            return envelope.data

    def parse(self, model: Type[M], data: Any, context: str) -> M:
        """
        Validate the ``data`` of a success envelope against a model

        Raises:
            InvalidResponseError: ``data`` does not fit the model; reported like any other failure
        """
        try:
            return model.model_validate(data)
        except ValidationError as e:
            self.logger.debug(f"{context} returned data not matching {model.__name__}: {e}")
            self._fail(InvalidResponseError(MALFORMED_MESSAGE), context)

    def parse_list(self, model: Type[M], data: Any, context: str) -> List[M]:
        """Validate a list payload; a missing list is empty"""
        if data is None:
            return []
        if not isinstance(data, list):
            self._fail(InvalidResponseError(MALFORMED_MESSAGE), context)
        return [self.parse(model, item, context) for item in data]

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.send("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.send("POST", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.send("DELETE", path)

    @staticmethod
    def _decode(response: httpx.Response) -> Optional[Envelope]:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or "code" not in body:
            return None
        try:
            return Envelope.model_validate(body)
        except ValueError:
            return None

    def _classify_status(self, response: httpx.Response) -> ApiError:
        status = response.status_code
        envelope = self._decode(response)
        server_message = envelope.message if envelope is not None else None
        message = server_message or response.reason_phrase or FALLBACK_MESSAGE
        error_class = error_class_for_status(status)
        return error_class(message, status=status, code=envelope.code if envelope else None)

    def _fail(self, error: ApiError, context: str) -> None:
        """Apply the side effects of a classified failure, then raise it"""
        self.error_tracker.track_error(error, context=context, status=error.status, kind=error.kind)

        if isinstance(error, AuthenticationError):
            self._handle_unauthenticated(error)
        else:
            self._notify(error)

        raise error

    def _handle_unauthenticated(self, error: AuthenticationError) -> None:
        self.credential_store.clear()
        self.logger.warning("Authentication failed - credential cleared")
        self._notice("error", SESSION_EXPIRED_MESSAGE)
        self.events.emit(UNAUTHENTICATED, error)

    def _notify(self, error: ApiError) -> None:
        notice = STATUS_NOTICES.get(type(error))
        if isinstance(error, RateLimitError):
            self._notice("warning", notice)
        elif notice is not None:
            self._notice("error", notice)
        else:
            self._notice("error", error.message or FALLBACK_MESSAGE)

    def _notice(self, level: str, message: str) -> None:
        if self.notifier is None:
            return
        getattr(self.notifier, level)(message)
