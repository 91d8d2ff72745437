"""
API dependency helpers.

Resolves the calling owner from a bearer token, normalizes pagination and
guards owner-only mutations.
"""
import logging
from typing import Optional, Tuple

from fastapi import Header, HTTPException, Query, status

from portfolio.utils.tokens import TokenError, decode_access_token, owner_id_from_claims, parse_bearer

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


def get_current_owner(authorization: Optional[str] = Header(default=None)) -> str:
    """Return the owner id (stringified ``user_id`` claim) of the caller.

    Raises 401 with the token error message when the header is missing,
    malformed, signed with a different secret, expired or lacks ``user_id``.
    """
    try:
        token = parse_bearer(authorization)
        claims = decode_access_token(token)
        return owner_id_from_claims(claims)
    except TokenError as exc:
        logger.info("auth_rejected: reason=%s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))


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


class Pagination:
    """Query-string pagination with out-of-range values reset to defaults."""

    def __init__(
        self,
        page: Optional[str] = Query(default=None),
        limit: Optional[str] = Query(default=None),
    ):
        self.page, self.limit = normalize_pagination(page, limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def require_owner(resource, owner_id: str) -> None:
    """403 unless ``resource`` belongs to ``owner_id``."""
    if resource.owner_id != owner_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
