"""
User repository functions.

Emails are stored lower-cased and stripped, so lookups normalize their input
the same way.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from auth_service.db import models


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def create_user(db: Session, username: str, email: str, password_hash: str) -> models.User:
    user = models.User(
        username=username,
        email=_normalize_email(email),
        password_hash=password_hash,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == _normalize_email(email)).first()


def find_conflicting_user(
    db: Session,
    email: str,
    username: str,
    exclude_id: Optional[int] = None,
) -> Optional[models.User]:
    """Return a user (other than `exclude_id`) already holding `email` or `username`."""
    q = db.query(models.User).filter(
        or_(models.User.email == _normalize_email(email), models.User.username == username)
    )
    if exclude_id is not None:
        q = q.filter(models.User.id != exclude_id)
    return q.first()


def update_user_profile(db: Session, user: models.User, username: str, email: str) -> models.User:
    user.username = username
    user.email = _normalize_email(email)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> bool:
    try:
        user = get_user(db, user_id)
        if not user:
            return False
        db.delete(user)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete user {user_id}: {str(e)}")


def count_users(db: Session) -> int:
    return db.query(models.User).count()


def list_users(db: Session, skip: int = 0, limit: int = 10):
    """Users newest first."""
    return (
        db.query(models.User)
        .order_by(models.User.created_at.desc(), models.User.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
