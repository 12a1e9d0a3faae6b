"""
Authentication service - login, registration and credential lifecycle.
"""

from .models import User, LoginRequest, LoginResponse, RegisterRequest
from .auth_api import AuthAPI
from .auth_manager import AuthManager

__all__ = [
    'User',
    'LoginRequest',
    'LoginResponse',
    'RegisterRequest',
    'AuthAPI',
    'AuthManager'
]
