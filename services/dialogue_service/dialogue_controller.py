"""
Dialogue session controller - owns at most one current conversational session.

Sending a message is a two-phase operation: the user's message is appended
immediately with a provisional marker, then either promoted once the server
answers or removed by that marker when the call fails.
"""

import uuid
from datetime import datetime
from typing import List, MutableMapping, Any, Optional

from infrastructure.transport.errors import ApiError, NoActiveSessionError
from infrastructure.transport.pipeline import RequestPipeline
from services.base_controller import SessionStateController
from services.dialogue_service.dialogue_api import DialogueAPI
from services.dialogue_service.models import (
    CreateScenarioRequest,
    DialogueMessage,
    DialogueSession,
    MessageRole,
    Scenario,
    SessionStatus,
)
from utils.logging_config import log_session_event


class DialogueController(SessionStateController):
    """
    States: IDLE -> ACTIVE -> ENDED.

    ``start_session`` replaces any previous session and its messages,
    ``end_current_session`` moves ACTIVE to ENDED once the server agrees and
    ``clear_session`` returns to IDLE without a remote call.
    """

    namespace = "dialogue"
    state_defaults = {
        "scenarios": list,
        "current_session": lambda: None,
        "messages": list,
        "status": lambda: SessionStatus.IDLE,
        "loading": lambda: False,
        "pending_sends": lambda: 0,
        "error": lambda: None,
    }

    def __init__(
        self,
        pipeline: RequestPipeline,
        state: Optional[MutableMapping[str, Any]] = None,
        default_target_lang: str = "en",
        api: Optional[DialogueAPI] = None,
    ):
        super().__init__(pipeline, state)
        self.api = api or DialogueAPI(pipeline)
        self.default_target_lang = default_target_lang

    # ------------------------------------------------------------------ state

    @property
    def scenarios(self) -> List[Scenario]:
        return list(self._get("scenarios"))

    @property
    def current_session(self) -> Optional[DialogueSession]:
        return self._get("current_session")

    @property
    def messages(self) -> List[DialogueMessage]:
        return list(self._get("messages"))

    @property
    def status(self) -> SessionStatus:
        return self._get("status")

    @property
    def sending_message(self) -> bool:
        return self._get("pending_sends") > 0

    @property
    def has_active_session(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def scenario_count(self) -> int:
        return len(self._get("scenarios"))

    @property
    def preset_scenarios(self) -> List[Scenario]:
        return [s for s in self._get("scenarios") if s.is_preset]

    @property
    def custom_scenarios(self) -> List[Scenario]:
        return [s for s in self._get("scenarios") if not s.is_preset]

    @property
    def message_count(self) -> int:
        return len(self._get("messages"))

    def get_scenario_by_id(self, scenario_id: int) -> Optional[Scenario]:
        return next((s for s in self._get("scenarios") if s.id == scenario_id), None)

    # -------------------------------------------------------------- scenarios

    async def fetch_scenarios(self) -> List[Scenario]:
        """Load the scenario catalog"""
        self._set("loading", True)
        self._set("error", None)
        try:
            scenarios = await self.api.get_scenarios()
            self._set("scenarios", scenarios)
            self.logger.info(f"Loaded {len(scenarios)} scenarios")
            return list(scenarios)
        except ApiError as e:
            self._set("error", e.message or "Failed to fetch scenarios")
            raise
        finally:
            self._set("loading", False)

    async def create_scenario(self, name: str, description: str, category: str) -> Scenario:
        """Create a custom scenario and append it to the catalog"""
        self._set("loading", True)
        self._set("error", None)
        try:
            scenario = await self.api.create_scenario(
                CreateScenarioRequest(name=name, description=description, category=category)
            )
            self._get("scenarios").append(scenario)
            self.logger.info(f"Created scenario {scenario.id}: {scenario.name}")
            return scenario
        except ApiError as e:
            self._set("error", e.message or "Failed to create scenario")
            raise
        finally:
            self._set("loading", False)

    # ---------------------------------------------------------------- session

    async def start_session(self, scenario_id: int, target_lang: Optional[str] = None) -> DialogueSession:
        """
        Start a session for a scenario, replacing any current one wholesale.

        The message sequence becomes exactly the history the server returned.
        """
        self._set("loading", True)
        self._set("error", None)
        try:
            session = await self.api.start_session(scenario_id, target_lang or self.default_target_lang)
            self._set("current_session", session)
            self._set("messages", list(session.messages))
            self._set("status", SessionStatus.ACTIVE if session.is_active else SessionStatus.ENDED)
            log_session_event(self.logger, "dialogue_started", session_id=session.id, scenario_id=scenario_id)
            return session
        except ApiError as e:
            self._set("error", e.message or "Failed to start session")
            raise
        finally:
            self._set("loading", False)

    async def send_message(self, content: str) -> DialogueMessage:
        """
        Send a user message and return the assistant's reply.

        Raises:
            NoActiveSessionError: no current session, or it has ended (no remote call)
            ApiError: the call failed; the provisional message has been removed
        """
        session = self.current_session
        if session is None or self.status != SessionStatus.ACTIVE:
            error = NoActiveSessionError()
            self._set("error", error.message)
            raise error

        self._set("error", None)
        provisional = DialogueMessage(
            role=MessageRole.USER,
            content=content,
            timestamp=datetime.now(),
            provisional_id=uuid.uuid4().hex,
        )
        self._get("messages").append(provisional)
        self._set("pending_sends", self._get("pending_sends") + 1)
        self.logger.debug(f"Appended provisional message {provisional.provisional_id}")

        try:
            reply = await self.api.send_message(session.id, content)
        except ApiError as e:
            self._discard_provisional(provisional)
            self._set("error", e.message or "Failed to send message")
            raise
        finally:
            self._set("pending_sends", max(0, self._get("pending_sends") - 1))

        if not self._is_current(session):
            # The session was replaced or cleared while the reply was in flight
            self.logger.info(f"Dropping reply for superseded session {session.id}")
            return reply

        self._promote_provisional(provisional)
        self._get("messages").append(reply)
        return reply

    async def end_current_session(self) -> None:
        """End the current session; a no-op when there is none or it already ended"""
        session = self.current_session
        if session is None:
            return
        if self.status == SessionStatus.ENDED:
            self.logger.debug(f"Session {session.id} already ended")
            return

        self._set("loading", True)
        self._set("error", None)
        try:
            await self.api.end_session(session.id)
            if self._is_current(session):
                self._set("current_session", session.model_copy(update={"ended_at": datetime.now()}))
                self._set("status", SessionStatus.ENDED)
            log_session_event(self.logger, "dialogue_ended", session_id=session.id)
        except ApiError as e:
            self._set("error", e.message or "Failed to end session")
            raise
        finally:
            self._set("loading", False)

    def clear_session(self):
        """Drop the current session and its messages locally"""
        self.reset_state("current_session", "messages", "status", "error")

    def clear_all(self):
        self.reset_state("scenarios", "current_session", "messages", "status", "error")

    # -------------------------------------------------------------- internals

    def _is_current(self, session: DialogueSession) -> bool:
        current = self.current_session
        return current is not None and current.id == session.id

    def _find_provisional(self, provisional: DialogueMessage) -> Optional[int]:
        for index, message in enumerate(self._get("messages")):
            if message.provisional_id == provisional.provisional_id:
                return index
        return None

    def _promote_provisional(self, provisional: DialogueMessage):
        index = self._find_provisional(provisional)
        if index is not None:
            self._get("messages")[index] = provisional.model_copy(update={"provisional_id": None})

    def _discard_provisional(self, provisional: DialogueMessage):
        index = self._find_provisional(provisional)
        if index is not None:
            del self._get("messages")[index]
            self.logger.debug(f"Rolled back provisional message {provisional.provisional_id}")
