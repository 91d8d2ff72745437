"""
SQLAlchemy models for the auth service.

Callers use `from auth_service.db import models` and `models.User`.
"""

from .base import Base, now_utc  # re-export
from .users import User

__all__ = [
    "Base",
    "now_utc",
    "User",
]
