"""
Composition root - builds the pipeline and every controller around one session-state mapping.
"""

from dataclasses import dataclass
from typing import Any, Callable, MutableMapping, Optional

import httpx

from config.app_config import AppConfig, get_config
from infrastructure.events import EventBus, UNAUTHENTICATED
from infrastructure.storage.credential_store import CredentialStore, SessionStateCredentialStore
from infrastructure.transport.pipeline import RequestPipeline
from services.auth_service.auth_manager import AuthManager
from services.dialogue_service.dialogue_controller import DialogueController
from services.notifications import LoggingNotifier
from services.quiz_service.quiz_controller import QuizController
from services.records_service.records_controller import RecordsController
from services.word_service.word_controller import WordController
from utils.logging_config import ErrorTracker, get_error_tracker, get_logger

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Everything a page needs, wired once per browser session"""
    config: AppConfig
    events: EventBus
    pipeline: RequestPipeline
    auth: AuthManager
    dialogue: DialogueController
    quiz: QuizController
    records: RecordsController
    words: WordController

    def reset_user_state(self):
        """Forget everything that belongs to the signed-out user"""
        self.auth.set_user(None)
        self.dialogue.clear_all()
        self.quiz.clear_all()
        self.records.clear_all()
        self.words.clear_all()


def build_app_context(
    state: MutableMapping[str, Any],
    config: Optional[AppConfig] = None,
    notifier: Any = None,
    navigate: Optional[Callable[[str], None]] = None,
    credential_store: Optional[CredentialStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    error_tracker: Optional[ErrorTracker] = None,
) -> AppContext:
    """
    Wire the client together

    Args:
        state: Session-state mapping shared by every controller
        config: Application config (global config when omitted)
        notifier: Receives user notices (a LoggingNotifier when omitted)
        navigate: Called with the login route after an authentication failure
        credential_store: Token storage (kept in ``state`` when omitted)
        transport: Optional httpx transport for the pipeline
        error_tracker: Receives classified failures (the global tracker when omitted)

    Returns:
        AppContext with the unauthenticated handler subscribed
    """
    config = config or get_config()
    store = credential_store or SessionStateCredentialStore(state, key=config.storage.credential_key)
    events = EventBus()
    pipeline = RequestPipeline(
        base_url=config.api.base_url,
        credential_store=store,
        events=events,
        notifier=notifier if notifier is not None else LoggingNotifier(),
        timeout=config.api.timeout_seconds,
        transport=transport,
        error_tracker=error_tracker or get_error_tracker(),
    )

    session = config.session
    context = AppContext(
        config=config,
        events=events,
        pipeline=pipeline,
        auth=AuthManager(pipeline, state),
        dialogue=DialogueController(pipeline, state, default_target_lang=session.default_target_lang),
        quiz=QuizController(pipeline, state),
        records=RecordsController(pipeline, state, page_size=session.default_page_size),
        words=WordController(
            pipeline, state,
            source_lang=session.default_source_lang,
            target_lang=session.default_word_target_lang,
        ),
    )

    def on_unauthenticated(_error):
        context.reset_user_state()
        logger.info(f"Redirecting to '{config.navigation.login_route}' after authentication failure")
        if navigate is not None:
            navigate(config.navigation.login_route)

    events.subscribe(UNAUTHENTICATED, on_unauthenticated)
    return context
