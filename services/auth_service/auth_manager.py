"""
Authentication service - creates and destroys the client credential.
"""

from typing import Any, MutableMapping, Optional, Tuple

from infrastructure.transport.errors import ApiError
from infrastructure.transport.pipeline import RequestPipeline
from services.auth_service.auth_api import AuthAPI
from services.auth_service.models import LoginRequest, RegisterRequest, User
from services.base_controller import SessionStateController
from utils.logging_config import log_user_interaction


class AuthManager(SessionStateController):
    """
    Main authentication manager service.
    The token itself lives in the pipeline's credential store; only the
    user profile is kept in session state.
    """

    namespace = "auth"
    state_defaults = {
        "user": lambda: None,
        "loading": lambda: False,
        "error": lambda: None,
    }

    def __init__(
        self,
        pipeline: RequestPipeline,
        state: Optional[MutableMapping[str, Any]] = None,
        api: Optional[AuthAPI] = None,
    ):
        super().__init__(pipeline, state)
        self.api = api or AuthAPI(pipeline)
        self.credential_store = pipeline.credential_store

    @property
    def user(self) -> Optional[User]:
        return self._get("user")

    @property
    def is_authenticated(self) -> bool:
        return self.credential_store.has_token()

    def set_user(self, user: User):
        self._set("user", user)

    def set_token(self, token: str):
        self.credential_store.set_token(token)

    def clear_auth(self):
        """Forget the user and remove the stored credential"""
        self._set("user", None)
        self.credential_store.clear()

    async def login(self, username: str, password: str) -> User:
        """
        Authenticate user and store the returned credential

        Args:
            username: Username
            password: Password

        Returns:
            The authenticated user

        Raises:
            ApiError: login rejected or service unreachable; local auth is cleared
        """
        self._set("loading", True)
        self._set("error", None)
        try:
            response = await self.api.login(LoginRequest(username=username, password=password))
            self.set_token(response.token)
            self.set_user(response.user)
            log_user_interaction(self.logger, "login", username=username)
            return response.user
        except ApiError as e:
            self.clear_auth()
            self._set("error", e.message or "Login failed")
            raise
        finally:
            self._set("loading", False)

    async def register(self, username: str, password: str, email: str) -> Tuple[bool, str]:
        """
        Register a new user

        Returns:
            (success, message) tuple
        """
        if not all([username, password, email]):
            return False, "All fields are required"

        if "@" not in email:
            return False, "Please enter a valid email address"

        self._set("loading", True)
        self._set("error", None)
        try:
            user = await self.api.register(RegisterRequest(username=username, password=password, email=email))
            self.logger.info(f"User registered: {user.username}")
            return True, "Account created successfully! Please log in."
        except ApiError as e:
            self._set("error", e.message)
            return False, e.message or "Registration failed"
        finally:
            self._set("loading", False)

    async def logout(self) -> None:
        """Logout current user; local auth is cleared even if the remote call fails"""
        self._set("loading", True)
        try:
            await self.api.logout()
        except ApiError as e:
            self.logger.error(f"Logout API error: {e.message}")
        finally:
            self.clear_auth()
            self._set("loading", False)
            self.logger.info("User logged out")

    async def fetch_current_user(self) -> User:
        """Reload the profile of the credential holder"""
        try:
            user = await self.api.get_current_user()
        except ApiError as e:
            self._set("error", e.message)
            raise
        self.set_user(user)
        return user
