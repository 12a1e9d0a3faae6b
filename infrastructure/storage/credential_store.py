"""
Credential storage - holds the single bearer token of this client instance.
"""

from abc import ABC, abstractmethod
from typing import Any, MutableMapping, Optional


class CredentialStore(ABC):
    """
    A single named key holding the raw token string.
    An absent key means the client is unauthenticated.
    """

    def __init__(self, key: str = "token"):
        self.key = key

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the stored token or None"""

    @abstractmethod
    def set_token(self, token: str) -> None:
        """Store a token, replacing any previous one"""

    @abstractmethod
    def clear(self) -> None:
        """Remove the token"""

    def has_token(self) -> bool:
        return bool(self.get_token())


class SessionStateCredentialStore(CredentialStore):
    """
    Keeps the token in one browser session's state mapping (``st.session_state``
    in the app), so every browser session holds its own credential and survives
    reruns of the script.
    """

    namespace = "credential"

    def __init__(self, state: MutableMapping[str, Any], key: str = "token"):
        super().__init__(key)
        self.state = state

    @property
    def slot(self) -> str:
        return f"{self.namespace}.{self.key}"

    def get_token(self) -> Optional[str]:
        token = self.state.get(self.slot)
        return token if isinstance(token, str) and token else None

    def set_token(self, token: str) -> None:
        self.state[self.slot] = token

    def clear(self) -> None:
        self.state.pop(self.slot, None)


class MemoryCredentialStore(SessionStateCredentialStore):
    """Store over a private dict, used for headless clients and tests"""

    def __init__(self, key: str = "token", token: Optional[str] = None):
        super().__init__({}, key)
        if token:
            self.set_token(token)
