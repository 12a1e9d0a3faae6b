"""
User and login data models for the authentication service.
"""

from datetime import datetime
from typing import Optional

from infrastructure.transport.envelope import ApiModel


class User(ApiModel):
    """Account as returned by the remote service"""
    id: int
    username: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(ApiModel):
    username: str
    password: str


class LoginResponse(ApiModel):
    token: str
    user: User


class RegisterRequest(ApiModel):
    username: str
    password: str
    email: str
