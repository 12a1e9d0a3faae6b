"""
Dialogue service data models for scenarios, sessions and messages.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from infrastructure.transport.envelope import ApiModel


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class SessionStatus(str, Enum):
    """Lifecycle of the controller's current session"""
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


class DialogueMessage(ApiModel):
    """
    One turn of a dialogue.

    ``provisional_id`` marks a user message appended before the server
    confirmed it; it never leaves the client.
    """
    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    timestamp: Optional[datetime] = None
    provisional_id: Optional[str] = Field(default=None, exclude=True)

    @property
    def is_provisional(self) -> bool:
        return self.provisional_id is not None


class Scenario(ApiModel):
    """Conversation setting the AI responder plays in"""
    id: int
    name: str
    description: str = ""
    category: str = ""
    is_preset: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None


class CreateScenarioRequest(ApiModel):
    name: str
    description: str
    category: str


class DialogueSession(ApiModel):
    """Server-side dialogue session; active while ``ended_at`` is absent"""
    id: int
    user_id: Optional[int] = None
    scenario_id: int
    messages: List[DialogueMessage] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None
