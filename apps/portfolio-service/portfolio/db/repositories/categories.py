"""
Category repository functions.
"""
from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from portfolio.db import models, schemas

_REQUIRED = ("title", "position")


def next_category_position(db: Session, portfolio_id: int) -> int:
    current = (
        db.query(func.max(models.Category.position))
        .filter(models.Category.portfolio_id == portfolio_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def create_category(db: Session, category: schemas.CategoryCreate, owner_id: str):
    position = category.position
    if position is None:
        position = next_category_position(db, category.portfolio_id)
    db_category = models.Category(
        title=category.title,
        description=category.description,
        position=position,
        portfolio_id=category.portfolio_id,
        owner_id=owner_id,
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def get_category(db: Session, category_id: int):
    return db.query(models.Category).filter(models.Category.id == category_id).first()


def get_category_with_projects(db: Session, category_id: int):
    return (
        db.query(models.Category)
        .options(selectinload(models.Category.projects))
        .filter(models.Category.id == category_id)
        .first()
    )


def get_categories_by_portfolio(db: Session, portfolio_id: int):
    return (
        db.query(models.Category)
        .filter(models.Category.portfolio_id == portfolio_id)
        .order_by(models.Category.position.asc(), models.Category.created_at.asc())
        .all()
    )


def get_categories_by_owner(db: Session, owner_id: str, skip: int = 0, limit: int = 10):
    return (
        db.query(models.Category)
        .filter(models.Category.owner_id == owner_id)
        .order_by(models.Category.position.asc(), models.Category.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_categories(db: Session, skip: int = 0, limit: int = 10):
    return db.query(models.Category).order_by(models.Category.id).offset(skip).limit(limit).all()


def update_category(db: Session, category_id: int, category: schemas.CategoryUpdate):
    db_category = get_category(db, category_id)
    if db_category:
        for key, value in category.model_dump(exclude_unset=True).items():
            if value is None and key in _REQUIRED:
                continue
            setattr(db_category, key, value)
        db.commit()
        db.refresh(db_category)
    return db_category


def update_category_position(db: Session, category_id: int, position: int):
    db_category = get_category(db, category_id)
    if db_category:
        db_category.position = position
        db.commit()
        db.refresh(db_category)
    return db_category


def delete_category(db: Session, category_id: int) -> bool:
    try:
        db_category = get_category(db, category_id)
        if not db_category:
            return False
        db.delete(db_category)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete category {category_id}: {str(e)}")
