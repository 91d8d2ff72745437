"""
API dependency helpers for the auth service.
"""
import logging
from typing import Optional, Tuple

from fastapi import Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from auth_service.db import models
from auth_service.db.database import get_db
from auth_service.db.repositories import users as user_repo
from auth_service.utils.security import TokenError, TokenExpiredError, decode_token, parse_bearer

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "-"


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> models.User:
    """Resolve the bearer token to a live user row.

    A valid token for a user that has since been deleted is rejected with
    401 ``User not found``.
    """
    try:
        claims = decode_token(parse_bearer(authorization))
    except TokenExpiredError as exc:
        logger.warning("unauthorized_request: reason=token_expired ip=%s", client_ip(request))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except TokenError as exc:
        logger.warning("unauthorized_request: reason=%s ip=%s", exc, client_ip(request))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))

    try:
        user_id = int(claims["user_id"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token claims")

    user = user_repo.get_user(db, user_id)
    if not user:
        logger.warning("unauthorized_request: reason=user_not_found user_id=%s ip=%s", user_id, client_ip(request))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def _to_int(value) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_pagination(page, limit) -> Tuple[int, int]:
    """Coerce raw `page`/`limit` values, resetting unparsable or out-of-range ones.

    `page` is capped at MAX_PAGE so the computed offset fits a signed 64-bit column.
    """
    page, limit = _to_int(page), _to_int(limit)
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if limit is None or limit < 1 or limit > MAX_LIMIT:
        limit = DEFAULT_LIMIT
    return min(page, MAX_PAGE), limit


def pagination_params(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
) -> Tuple[int, int]:
    return normalize_pagination(page, limit)
