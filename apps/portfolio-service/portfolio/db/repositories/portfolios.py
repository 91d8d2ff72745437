"""
Portfolio repository functions.

Implements create/read/update/delete for portfolios, owner-scoped listing,
relation loading and the per-owner duplicate title check.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy.orm import Session, selectinload

from portfolio.db import models, schemas

# Columns that cannot be cleared through a partial update
_REQUIRED = ("title",)


def create_portfolio(db: Session, portfolio: schemas.PortfolioCreate, owner_id: str):
    db_portfolio = models.Portfolio(
        title=portfolio.title,
        description=portfolio.description,
        owner_id=owner_id,
    )
    db.add(db_portfolio)
    db.commit()
    db.refresh(db_portfolio)
    return db_portfolio


def get_portfolio(db: Session, portfolio_id: int):
    """Basic portfolio row without relations."""
    return db.query(models.Portfolio).filter(models.Portfolio.id == portfolio_id).first()


def get_portfolio_with_relations(db: Session, portfolio_id: int):
    return (
        db.query(models.Portfolio)
        .options(
            selectinload(models.Portfolio.categories),
            selectinload(models.Portfolio.sections),
        )
        .filter(models.Portfolio.id == portfolio_id)
        .first()
    )


def get_portfolios_by_owner(db: Session, owner_id: str, skip: int = 0, limit: int = 10):
    return (
        db.query(models.Portfolio)
        .filter(models.Portfolio.owner_id == owner_id)
        .order_by(models.Portfolio.created_at.desc(), models.Portfolio.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_portfolios(db: Session, skip: int = 0, limit: int = 10):
    return db.query(models.Portfolio).order_by(models.Portfolio.id).offset(skip).limit(limit).all()


def update_portfolio(db: Session, portfolio_id: int, portfolio: schemas.PortfolioUpdate):
    db_portfolio = get_portfolio(db, portfolio_id)
    if db_portfolio:
        for key, value in portfolio.model_dump(exclude_unset=True).items():
            if value is None and key in _REQUIRED:
                continue
            setattr(db_portfolio, key, value)
        db.commit()
        db.refresh(db_portfolio)
    return db_portfolio


def delete_portfolio(db: Session, portfolio_id: int) -> bool:
    """Delete a portfolio; categories, projects, sections and contents cascade."""
    try:
        db_portfolio = get_portfolio(db, portfolio_id)
        if not db_portfolio:
            return False
        db.delete(db_portfolio)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete portfolio {portfolio_id}: {str(e)}")


def check_duplicate_portfolio(
    db: Session,
    title: str,
    owner_id: str,
    exclude_id: Optional[int] = None,
) -> bool:
    """True when the owner already has a portfolio titled `title` (other than `exclude_id`)."""
    q = db.query(models.Portfolio).filter(
        models.Portfolio.title == title,
        models.Portfolio.owner_id == owner_id,
    )
    if exclude_id:
        q = q.filter(models.Portfolio.id != exclude_id)
    return q.count() > 0
