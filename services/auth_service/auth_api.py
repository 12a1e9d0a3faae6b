"""
Remote authentication endpoints.
"""

from infrastructure.transport.pipeline import RequestPipeline
from services.auth_service.models import LoginRequest, LoginResponse, RegisterRequest, User


class AuthAPI:
    """Typed wrappers over the /auth endpoints"""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def login(self, request: LoginRequest) -> LoginResponse:
        data = await self.pipeline.post("/auth/login", json=request.to_payload())
        return self.pipeline.parse(LoginResponse, data, "POST /auth/login")

    async def register(self, request: RegisterRequest) -> User:
        data = await self.pipeline.post("/auth/register", json=request.to_payload())
        # The service wraps the new account as {"user": {...}}
        if isinstance(data, dict) and "user" in data:
            data = data["user"]
        return self.pipeline.parse(User, data, "POST /auth/register")

    async def logout(self) -> None:
        await self.pipeline.post("/auth/logout")

    async def get_current_user(self) -> User:
        data = await self.pipeline.get("/auth/me")
        return self.pipeline.parse(User, data, "GET /auth/me")
