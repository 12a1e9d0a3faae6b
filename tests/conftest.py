"""
Shared fixtures: a scripted remote service behind httpx.MockTransport
"""

import logging
from typing import Any, Callable, Dict, List, Tuple
from unittest.mock import Mock

import httpx
import pytest

from infrastructure.events import EventBus
from infrastructure.storage.credential_store import MemoryCredentialStore
from infrastructure.transport.pipeline import RequestPipeline
from utils.logging_config import ErrorTracker

BASE_URL = "http://lingua.test/api"
API_PREFIX = "/api"


def envelope(data: Any = None, code: int = 200, message: str = "success") -> Dict[str, Any]:
    return {"code": code, "message": message, "data": data}


class FakeServer:
    """
    Routes (method, path) to handlers and records every request.

    A handler takes the ``httpx.Request`` and returns an ``httpx.Response``
    (or an awaitable of one).
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable] = {}
        self.requests: List[httpx.Request] = []

    def route(self, method: str, path: str, handler: Callable):
        self.routes[(method.upper(), path)] = handler

    def reply(self, method: str, path: str, data: Any = None, code: int = 200,
              message: str = "success", status: int = 200):
        """Answer a route with an envelope"""
        body = envelope(data, code=code, message=message)
        self.route(method, path, lambda request: httpx.Response(status, json=body))

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method.upper() and r.url.path == API_PREFIX + path
        ]

    def handle(self, request: httpx.Request):
        self.requests.append(request)
        path = request.url.path[len(API_PREFIX):]
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json=envelope(None, code=404, message="No such route"))
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def store():
    return MemoryCredentialStore(token="test-token")


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def pipeline(server, store, events, notifier):
    return RequestPipeline(
        BASE_URL,
        store,
        events=events,
        notifier=notifier,
        transport=server.transport(),
        error_tracker=ErrorTracker(logging.getLogger("tests.errors")),
    )


@pytest.fixture
def state():
    """Stand-in for st.session_state"""
    return {}
