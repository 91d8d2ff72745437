"""
Section content repository functions.

Content blocks are ordered within their section by `order`; creation and full
updates are guarded by `check_duplicate_order`, while order-only updates and
bulk reorders accept transient collisions.
"""
from __future__ import annotations

from typing import Dict, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from portfolio.db import models, schemas

_REQUIRED = ("type", "content", "order")


def next_content_order(db: Session, section_id: int) -> int:
    current = (
        db.query(func.max(models.SectionContent.order))
        .filter(models.SectionContent.section_id == section_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def create_section_content(db: Session, content: schemas.SectionContentCreate, owner_id: str):
    order = content.order
    if order is None:
        order = next_content_order(db, content.section_id)
    db_content = models.SectionContent(
        section_id=content.section_id,
        type=content.type.value,
        content=content.content,
        order=order,
        metadata_json=content.metadata,
        owner_id=owner_id,
    )
    db.add(db_content)
    db.commit()
    db.refresh(db_content)
    return db_content


def get_section_content(db: Session, content_id: int):
    return db.query(models.SectionContent).filter(models.SectionContent.id == content_id).first()


def get_contents_by_section(db: Session, section_id: int):
    return (
        db.query(models.SectionContent)
        .filter(models.SectionContent.section_id == section_id)
        .order_by(models.SectionContent.order.asc(), models.SectionContent.id.asc())
        .all()
    )


def update_section_content(db: Session, content_id: int, content: schemas.SectionContentUpdate):
    db_content = get_section_content(db, content_id)
    if db_content:
        for key, value in content.model_dump(exclude_unset=True).items():
            if value is None and key in _REQUIRED:
                continue
            if key == "metadata":
                db_content.metadata_json = value
            elif key == "type":
                db_content.type = schemas.ContentTypeEnum(value).value
            else:
                setattr(db_content, key, value)
        db.commit()
        db.refresh(db_content)
    return db_content


def update_content_order(db: Session, content_id: int, order: int):
    db_content = get_section_content(db, content_id)
    if db_content:
        db_content.order = order
        db.commit()
        db.refresh(db_content)
    return db_content


def reorder_contents(db: Session, orders: Dict[int, int]):
    """Apply `{content_id: order}` in one transaction and return the updated rows."""
    if not orders:
        return []
    try:
        rows = (
            db.query(models.SectionContent)
            .filter(models.SectionContent.id.in_(list(orders.keys())))
            .all()
        )
        for row in rows:
            row.order = orders[row.id]
        db.commit()
        for row in rows:
            db.refresh(row)
        return sorted(rows, key=lambda r: (r.section_id, r.order, r.id))
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to reorder section contents: {str(e)}")


def delete_section_content(db: Session, content_id: int) -> bool:
    try:
        db_content = get_section_content(db, content_id)
        if not db_content:
            return False
        db.delete(db_content)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete section content {content_id}: {str(e)}")


def check_duplicate_order(
    db: Session,
    section_id: int,
    order: int,
    exclude_id: Optional[int] = None,
) -> bool:
    """True when another content block in `section_id` already sits at `order`."""
    q = db.query(models.SectionContent).filter(
        models.SectionContent.section_id == section_id,
        models.SectionContent.order == order,
    )
    if exclude_id:
        q = q.filter(models.SectionContent.id != exclude_id)
    return q.count() > 0
