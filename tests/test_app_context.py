"""
Tests for the composition root: wiring and global authentication-failure handling
"""

import logging
from unittest.mock import Mock

import httpx
import pytest

from config.app_config import AppConfig
from infrastructure.events import UNAUTHENTICATED
from infrastructure.transport.errors import AuthenticationError, ServerError
from services.app_context import build_app_context
from services.quiz_service import QuizStatus
from utils.logging_config import ErrorTracker


def records_page():
    return {"records": [], "total": 0, "page": 1, "pageSize": 20, "totalPages": 0}


@pytest.fixture
def app_config():
    config = AppConfig()
    config.api.base_url = "http://lingua.test/api"
    return config


@pytest.fixture
def navigate():
    return Mock()


@pytest.fixture
def context(state, app_config, server, store, notifier, navigate):
    return build_app_context(
        state,
        config=app_config,
        notifier=notifier,
        navigate=navigate,
        credential_store=store,
        transport=server.transport(),
        error_tracker=ErrorTracker(logging.getLogger("tests.errors")),
    )


class TestWiring:
    """Controllers share one pipeline and one state mapping"""

    def test_controllers_share_pipeline(self, context):
        controllers = [context.auth, context.dialogue, context.quiz, context.records, context.words]

        assert all(c.pipeline is context.pipeline for c in controllers)
        assert context.events.handler_count(UNAUTHENTICATED) == 1

    def test_session_defaults_come_from_config(self, state, app_config, store):
        app_config.session.default_page_size = 50
        app_config.session.default_word_target_lang = "ja"

        context = build_app_context(
            state, config=app_config, credential_store=store,
            error_tracker=ErrorTracker(logging.getLogger("tests.errors")),
        )

        assert context.records.page_size == 50
        assert context.words.target_lang == "ja"
        assert context.pipeline.base_url == "http://lingua.test/api"


class TestUnauthenticated:
    """A 401 anywhere signs the user out and navigates to login"""

    @pytest.mark.asyncio
    async def test_401_clears_credential_state_and_navigates(self, context, server, store, navigate):
        server.reply("POST", "/quiz/generate", {
            "id": 5, "difficulty": "easy",
            "questions": [{"questionId": 1, "question": "Q?", "options": ["A", "B"]}],
        })
        await context.quiz.generate_quiz("easy")
        server.route("GET", "/records", lambda request: httpx.Response(401))

        with pytest.raises(AuthenticationError):
            await context.records.fetch_records()

        assert store.get_token() is None
        assert context.auth.is_authenticated is False
        assert context.quiz.current_quiz is None
        assert context.quiz.status == QuizStatus.IDLE
        navigate.assert_called_once_with("login")

    @pytest.mark.asyncio
    async def test_other_failures_do_not_navigate(self, context, server, store, navigate):
        server.route("GET", "/records", lambda request: httpx.Response(500))

        with pytest.raises(ServerError):
            await context.records.fetch_records()

        assert store.get_token() == "test-token"
        navigate.assert_not_called()

    @pytest.mark.asyncio
    async def test_successful_call_is_unaffected(self, context, server, navigate):
        server.reply("GET", "/records", records_page())

        assert await context.records.fetch_records() == []
        navigate.assert_not_called()


class TestPerSessionCredential:
    """Each browser session holds its own credential"""

    def build(self, state, app_config, server):
        return build_app_context(
            state,
            config=app_config,
            transport=server.transport(),
            error_tracker=ErrorTracker(logging.getLogger("tests.errors")),
        )

    @pytest.mark.asyncio
    async def test_login_in_one_session_does_not_sign_in_another(self, app_config, server):
        alice = self.build({}, app_config, server)
        bob = self.build({}, app_config, server)
        server.reply("POST", "/auth/login", {"token": "alice-token", "user": {"id": 1, "username": "alice"}})
        server.reply("GET", "/quiz/history", [])

        await alice.auth.login("alice", "secret")
        await bob.quiz.fetch_history()

        assert alice.auth.is_authenticated is True
        assert bob.auth.is_authenticated is False
        assert "Authorization" not in server.calls("GET", "/quiz/history")[0].headers

    @pytest.mark.asyncio
    async def test_401_in_one_session_keeps_the_other_signed_in(self, app_config, server):
        alice_state, bob_state = {}, {}
        alice = self.build(alice_state, app_config, server)
        bob = self.build(bob_state, app_config, server)
        alice.auth.set_token("alice-token")
        bob.auth.set_token("bob-token")
        server.route("GET", "/records", lambda request: httpx.Response(401))

        with pytest.raises(AuthenticationError):
            await bob.records.fetch_records()

        assert bob.auth.is_authenticated is False
        assert alice.auth.is_authenticated is True
        assert alice.pipeline.credential_store.get_token() == "alice-token"
