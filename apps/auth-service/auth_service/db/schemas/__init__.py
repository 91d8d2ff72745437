"""
Pydantic schemas for the auth service.

Callers use `from auth_service.db import schemas` and `schemas.User`.
"""

from .users import (
    RegisterRequest,
    LoginRequest,
    UpdateProfileRequest,
    User,
    AuthResponse,
    PaginatedUsers,
    MessageResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UpdateProfileRequest",
    "User",
    "AuthResponse",
    "PaginatedUsers",
    "MessageResponse",
]
