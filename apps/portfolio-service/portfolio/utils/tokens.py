"""
Bearer token helpers.

Access tokens are HS256 JWTs issued by the auth service; this service only
validates them with the shared ``JWT_SECRET`` and reads the ``user_id`` claim.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

import jwt

DEFAULT_JWT_SECRET = "your-secret-key"


class TokenError(Exception):
    """Raised when a bearer token is missing, malformed or rejected."""


def _jwt_secret() -> str:
    return os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)


def _jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def parse_bearer(authorization: Optional[str]) -> str:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise TokenError("Authorization header required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise TokenError("Invalid authorization format")
    return parts[1]


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, _jwt_secret(), algorithms=[_jwt_algorithm()])
    except jwt.PyJWTError as exc:
        raise TokenError("Invalid token") from exc


def owner_id_from_claims(claims: Dict[str, Any]) -> str:
    user_id = claims.get("user_id")
    if user_id is None or user_id == "":
        raise TokenError("Invalid token claims")
    return str(user_id)
