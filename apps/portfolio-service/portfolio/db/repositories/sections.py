"""
Section repository functions.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from portfolio.db import models, schemas

_REQUIRED = ("title", "type", "position")


def next_section_position(db: Session, portfolio_id: int) -> int:
    current = (
        db.query(func.max(models.Section.position))
        .filter(models.Section.portfolio_id == portfolio_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def create_section(db: Session, section: schemas.SectionCreate, owner_id: str):
    position = section.position
    if position is None:
        position = next_section_position(db, section.portfolio_id)
    db_section = models.Section(
        title=section.title,
        description=section.description,
        type=section.type,
        position=position,
        portfolio_id=section.portfolio_id,
        owner_id=owner_id,
    )
    db.add(db_section)
    db.commit()
    db.refresh(db_section)
    return db_section


def get_section(db: Session, section_id: int):
    return db.query(models.Section).filter(models.Section.id == section_id).first()


def get_section_with_contents(db: Session, section_id: int):
    return (
        db.query(models.Section)
        .options(selectinload(models.Section.contents))
        .filter(models.Section.id == section_id)
        .first()
    )


def get_sections_by_owner(db: Session, owner_id: str, skip: int = 0, limit: int = 10):
    return (
        db.query(models.Section)
        .filter(models.Section.owner_id == owner_id)
        .order_by(models.Section.position.asc(), models.Section.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_sections_by_portfolio(db: Session, portfolio_id: int, with_contents: bool = False):
    q = db.query(models.Section)
    if with_contents:
        q = q.options(selectinload(models.Section.contents))
    return (
        q.filter(models.Section.portfolio_id == portfolio_id)
        .order_by(models.Section.position.asc(), models.Section.created_at.asc())
        .all()
    )


def get_sections_by_type(db: Session, section_type: str):
    return (
        db.query(models.Section)
        .filter(models.Section.type == section_type)
        .order_by(models.Section.position.asc(), models.Section.created_at.asc())
        .all()
    )


def list_sections(db: Session, skip: int = 0, limit: int = 10):
    return db.query(models.Section).order_by(models.Section.id).offset(skip).limit(limit).all()


def update_section(db: Session, section_id: int, section: schemas.SectionUpdate):
    db_section = get_section(db, section_id)
    if db_section:
        for key, value in section.model_dump(exclude_unset=True).items():
            if value is None and key in _REQUIRED:
                continue
            setattr(db_section, key, value)
        db.commit()
        db.refresh(db_section)
    return db_section


def update_section_position(db: Session, section_id: int, position: int):
    db_section = get_section(db, section_id)
    if db_section:
        db_section.position = position
        db.commit()
        db.refresh(db_section)
    return db_section


def delete_section(db: Session, section_id: int) -> bool:
    try:
        db_section = get_section(db, section_id)
        if not db_section:
            return False
        db.delete(db_section)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete section {section_id}: {str(e)}")


def check_duplicate_section(
    db: Session,
    title: str,
    portfolio_id: int,
    exclude_id: Optional[int] = None,
) -> bool:
    q = db.query(models.Section).filter(
        models.Section.title == title,
        models.Section.portfolio_id == portfolio_id,
    )
    if exclude_id:
        q = q.filter(models.Section.id != exclude_id)
    return q.count() > 0
