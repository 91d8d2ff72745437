"""
Registration and login endpoints.

Every outcome is counted in ``authentication_attempts_total`` under the
``register`` or ``login`` type.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from auth_service import metrics
from auth_service.db import schemas
from auth_service.db.database import get_db
from auth_service.db.repositories import users as user_repo
from auth_service.api.deps import client_ip
from auth_service.api.support import refresh_gauges
from auth_service.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

_USER_EXISTS = "User with this email or username already exists"
_INVALID_CREDENTIALS = "Invalid credentials"


def _issue_token(kind: str, user_id: int) -> str:
    try:
        token = create_access_token(user_id)
    except Exception as exc:
        logger.error("token_generation_failed: user_id=%s error=%s", user_id, exc)
        metrics.record_auth_attempt(kind, "token_error")
        raise HTTPException(status_code=500, detail="Failed to generate token")
    metrics.record_token_issued(kind)
    return token


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, request: Request, db: Session = Depends(get_db)):
    logger.info(
        "registration_attempt: username=%s email=%s ip=%s", payload.username, payload.email, client_ip(request)
    )

    if user_repo.find_conflicting_user(db, payload.email, payload.username):
        logger.warning("registration_failed: reason=user_exists username=%s email=%s", payload.username, payload.email)
        metrics.record_auth_attempt("register", "user_exists")
        raise HTTPException(status_code=409, detail=_USER_EXISTS)

    try:
        password_hash = hash_password(payload.password)
    except Exception as exc:
        logger.error("password_hash_failed: error=%s", exc)
        metrics.record_auth_attempt("register", "hash_error")
        raise HTTPException(status_code=500, detail="Failed to hash password")

    try:
        user = user_repo.create_user(db, payload.username, payload.email, password_hash)
    except IntegrityError:
        db.rollback()
        logger.warning("registration_failed: reason=user_exists username=%s email=%s", payload.username, payload.email)
        metrics.record_auth_attempt("register", "user_exists")
        raise HTTPException(status_code=409, detail=_USER_EXISTS)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("user_create_failed: error=%s", exc)
        metrics.record_auth_attempt("register", "db_error")
        raise HTTPException(status_code=500, detail="Failed to create user")

    token = _issue_token("register", user.id)
    metrics.record_auth_attempt("register", "success")
    refresh_gauges(db)
    logger.info("user_registered: user_id=%s username=%s email=%s", user.id, user.username, user.email)
    return {"token": token, "user": schemas.User.model_validate(user)}


@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.LoginRequest, request: Request, db: Session = Depends(get_db)):
    logger.info("login_attempt: email=%s ip=%s", payload.email, client_ip(request))

    user = user_repo.get_user_by_email(db, payload.email)
    if not user:
        logger.warning("login_failed: reason=user_not_found email=%s", payload.email)
        metrics.record_auth_attempt("login", "user_not_found")
        raise HTTPException(status_code=401, detail=_INVALID_CREDENTIALS)

    if not verify_password(payload.password, user.password_hash):
        logger.warning("login_failed: reason=invalid_password user_id=%s email=%s", user.id, payload.email)
        metrics.record_auth_attempt("login", "invalid_password")
        raise HTTPException(status_code=401, detail=_INVALID_CREDENTIALS)

    token = _issue_token("login", user.id)
    metrics.record_auth_attempt("login", "success")
    logger.info("user_logged_in: user_id=%s username=%s", user.id, user.username)
    return {"token": token, "user": schemas.User.model_validate(user)}
