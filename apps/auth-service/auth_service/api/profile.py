"""
Authenticated profile and user-listing endpoints.
"""
import logging
import math
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth_service.db import models, schemas
from auth_service.db.database import get_db
from auth_service.db.repositories import users as user_repo
from auth_service.api.deps import get_current_user, pagination_params
from auth_service.api.support import refresh_gauges

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["profile"])

_TAKEN = "Username or email already exists"


@router.get("/profile", response_model=schemas.User)
def get_profile(user: models.User = Depends(get_current_user)):
    logger.debug("profile_retrieved: user_id=%s", user.id)
    return schemas.User.model_validate(user)


@router.put("/profile", response_model=schemas.User)
def update_profile(
    payload: schemas.UpdateProfileRequest,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    if user_repo.find_conflicting_user(db, payload.email, payload.username, exclude_id=user.id):
        logger.warning(
            "profile_update_failed: reason=taken user_id=%s new_username=%s new_email=%s",
            user.id,
            payload.username,
            payload.email,
        )
        raise HTTPException(status_code=409, detail=_TAKEN)

    old_username, old_email = user.username, user.email
    try:
        updated = user_repo.update_user_profile(db, user, payload.username, payload.email)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=_TAKEN)
    logger.info(
        "profile_updated: user_id=%s old_username=%s new_username=%s old_email=%s new_email=%s",
        updated.id,
        old_username,
        updated.username,
        old_email,
        updated.email,
    )
    return schemas.User.model_validate(updated)


@router.delete("/profile", response_model=schemas.MessageResponse)
def delete_profile(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    user_id = user.id
    try:
        user_repo.delete_user(db, user_id)
    except RuntimeError as exc:
        logger.error("user_delete_failed: user_id=%s error=%s", user_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete user")
    refresh_gauges(db)
    logger.info("user_deleted: user_id=%s", user_id)
    return {"message": "User deleted successfully"}


@router.get("/users", response_model=schemas.PaginatedUsers)
def list_users(
    paging: Tuple[int, int] = Depends(pagination_params),
    db: Session = Depends(get_db),
    _user: models.User = Depends(get_current_user),
):
    page, limit = paging
    total = user_repo.count_users(db)
    users = user_repo.list_users(db, skip=(page - 1) * limit, limit=limit)
    return {
        "data": [schemas.User.model_validate(u) for u in users],
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit),
    }
