"""
Dialogue service - scenario catalog and conversational practice sessions.
"""

from .models import (
    MessageRole,
    SessionStatus,
    DialogueMessage,
    Scenario,
    CreateScenarioRequest,
    DialogueSession
)
from .dialogue_api import DialogueAPI
from .dialogue_controller import DialogueController

__all__ = [
    'MessageRole',
    'SessionStatus',
    'DialogueMessage',
    'Scenario',
    'CreateScenarioRequest',
    'DialogueSession',
    'DialogueAPI',
    'DialogueController'
]
