"""
Section content API endpoints.

Content blocks are ordered inside a section. Create and full update reject
an ``order`` already used by a sibling; the ``/order`` and ``/reorder``
endpoints back drag-and-drop and accept transient collisions.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.db import schemas
from portfolio.db.database import get_db
from portfolio.db.repositories import section_contents as content_repo
from portfolio.db.repositories import sections as section_repo
from portfolio.api.deps import get_current_owner, require_owner
from portfolio.metrics import record_operation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/section-contents", tags=["section-contents"])

_ORDER_CONFLICT = "Content with this order already exists in this section"


def _get_or_404(db: Session, content_id: int):
    db_content = content_repo.get_section_content(db, content_id)
    if not db_content:
        raise HTTPException(status_code=404, detail="Section content not found")
    return db_content


@router.get("/{content_id}", response_model=schemas.Envelope[schemas.SectionContent])
def get_section_content_endpoint(content_id: int, db: Session = Depends(get_db)):
    db_content = _get_or_404(db, content_id)
    return {
        "message": "Section content retrieved successfully",
        "data": schemas.SectionContent.model_validate(db_content),
    }


@router.post("/own", response_model=schemas.Envelope[schemas.SectionContent], status_code=status.HTTP_201_CREATED)
def create_section_content_endpoint(
    content: schemas.SectionContentCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    parent = section_repo.get_section(db, content.section_id)
    if not parent:
        raise HTTPException(status_code=404, detail="Section not found")
    require_owner(parent, owner_id)
    if content.order is not None and content_repo.check_duplicate_order(db, content.section_id, content.order):
        record_operation("section_content", "create", "conflict")
        raise HTTPException(status_code=409, detail=_ORDER_CONFLICT)
    created = content_repo.create_section_content(db, content, owner_id)
    record_operation("section_content", "create")
    logger.info("section_content_created: id=%s section_id=%s order=%s", created.id, created.section_id, created.order)
    return {
        "message": "Section content created successfully",
        "data": schemas.SectionContent.model_validate(created),
    }


@router.patch("/own/reorder", response_model=schemas.Envelope[List[schemas.SectionContent]])
def reorder_section_contents_endpoint(
    items: List[schemas.SectionContentReorderItem],
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    if not items:
        raise HTTPException(status_code=400, detail="At least one content item is required")
    orders = {}
    for item in items:
        db_content = _get_or_404(db, item.id)
        require_owner(db_content, owner_id)
        orders[item.id] = item.order
    try:
        updated = content_repo.reorder_contents(db, orders)
    except RuntimeError as exc:
        record_operation("section_content", "reorder", "error")
        logger.error("section_content_reorder_failed: ids=%s error=%s", sorted(orders), exc)
        raise HTTPException(status_code=500, detail="Failed to reorder section contents")
    record_operation("section_content", "reorder")
    return {
        "message": "Section contents reordered successfully",
        "data": [schemas.SectionContent.model_validate(c) for c in updated],
    }


@router.put("/own/{content_id}", response_model=schemas.Envelope[schemas.SectionContent])
def update_section_content_endpoint(
    content_id: int,
    content: schemas.SectionContentUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, content_id)
    require_owner(existing, owner_id)
    if content.order is not None and content_repo.check_duplicate_order(
        db, existing.section_id, content.order, exclude_id=content_id
    ):
        record_operation("section_content", "update", "conflict")
        raise HTTPException(status_code=409, detail=_ORDER_CONFLICT)
    updated = content_repo.update_section_content(db, content_id, content)
    record_operation("section_content", "update")
    return {
        "message": "Section content updated successfully",
        "data": schemas.SectionContent.model_validate(updated),
    }


@router.patch("/own/{content_id}/order", response_model=schemas.Envelope[schemas.SectionContent])
def update_section_content_order_endpoint(
    content_id: int,
    payload: schemas.SectionContentOrderUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, content_id)
    require_owner(existing, owner_id)
    updated = content_repo.update_content_order(db, content_id, payload.order)
    record_operation("section_content", "reorder")
    return {
        "message": "Section content order updated successfully",
        "data": schemas.SectionContent.model_validate(updated),
    }


@router.delete("/own/{content_id}", response_model=schemas.MessageResponse)
def delete_section_content_endpoint(
    content_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, content_id)
    require_owner(existing, owner_id)
    try:
        content_repo.delete_section_content(db, content_id)
    except RuntimeError as exc:
        record_operation("section_content", "delete", "error")
        logger.error("section_content_delete_failed: id=%s error=%s", content_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete section content")
    record_operation("section_content", "delete")
    return {"message": "Section content deleted successfully"}
