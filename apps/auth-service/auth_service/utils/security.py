"""
Password hashing and access-token helpers.

Passwords are bcrypt hashes managed through a passlib ``CryptContext``.
Access tokens are HS256 JWTs carrying ``user_id``, ``iat`` and ``exp``; the
portfolio service validates them with the same ``JWT_SECRET``.
"""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

DEFAULT_JWT_SECRET = "your-secret-key"
DEFAULT_EXPIRES_IN = 24 * 60 * 60


def _bcrypt_rounds() -> int:
    try:
        return int(os.getenv("BCRYPT_ROUNDS", "10"))
    except ValueError:
        return 10


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=_bcrypt_rounds())


class TokenError(Exception):
    """Raised for a missing, malformed or otherwise invalid token."""


class TokenExpiredError(TokenError):
    """Raised when a well-formed token is past its ``exp`` claim."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


def _jwt_secret() -> str:
    return os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)


def _jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def _expires_in() -> int:
    try:
        return int(os.getenv("JWT_EXPIRES_IN", str(DEFAULT_EXPIRES_IN)))
    except ValueError:
        return DEFAULT_EXPIRES_IN


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(seconds=_expires_in()))
    payload = {"user_id": user_id, "iat": now, "exp": expire}
    return jwt.encode(payload, _jwt_secret(), algorithm=_jwt_algorithm())


def decode_token(token: str) -> Dict[str, Any]:
    try:
        claims = jwt.decode(token, _jwt_secret(), algorithms=[_jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("Invalid token") from exc
    except jwt.PyJWTError as exc:
        raise TokenError("Invalid token") from exc
    if claims.get("user_id") is None:
        raise TokenError("Invalid token claims")
    return claims


def parse_bearer(authorization: Optional[str]) -> str:
    if not authorization:
        raise TokenError("Authorization header required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise TokenError("Invalid authorization format")
    return parts[1]
