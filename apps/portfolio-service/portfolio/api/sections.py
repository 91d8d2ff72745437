"""
Section API endpoints.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from portfolio.db import schemas
from portfolio.db.database import get_db
from portfolio.db.repositories import portfolios as portfolio_repo
from portfolio.db.repositories import section_contents as content_repo
from portfolio.db.repositories import sections as section_repo
from portfolio.api.deps import Pagination, get_current_owner, require_owner
from portfolio.metrics import record_operation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sections", tags=["sections"])


def _get_or_404(db: Session, section_id: int):
    db_section = section_repo.get_section(db, section_id)
    if not db_section:
        raise HTTPException(status_code=404, detail="Section not found")
    return db_section


@router.get("/own", response_model=schemas.PaginatedEnvelope[schemas.Section])
def list_own_sections(
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    items = section_repo.get_sections_by_owner(db, owner_id, skip=pagination.offset, limit=pagination.limit)
    return {
        "message": "Sections retrieved successfully",
        "data": [schemas.Section.model_validate(s) for s in items],
        "page": pagination.page,
        "limit": pagination.limit,
    }


@router.post("/own", response_model=schemas.Envelope[schemas.Section], status_code=status.HTTP_201_CREATED)
def create_section_endpoint(
    section: schemas.SectionCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    parent = portfolio_repo.get_portfolio(db, section.portfolio_id)
    if not parent:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    require_owner(parent, owner_id)
    if section_repo.check_duplicate_section(db, section.title, section.portfolio_id):
        record_operation("section", "create", "conflict")
        raise HTTPException(status_code=409, detail="Section with this title already exists in this portfolio")
    created = section_repo.create_section(db, section, owner_id)
    record_operation("section", "create")
    logger.info("section_created: id=%s portfolio_id=%s type=%s", created.id, created.portfolio_id, created.type)
    return {"message": "Section created successfully", "data": schemas.Section.model_validate(created)}


@router.put("/own/{section_id}", response_model=schemas.Envelope[schemas.Section])
def update_section_endpoint(
    section_id: int,
    section: schemas.SectionUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, section_id)
    require_owner(existing, owner_id)
    if section.title is not None and section_repo.check_duplicate_section(
        db, section.title, existing.portfolio_id, exclude_id=section_id
    ):
        record_operation("section", "update", "conflict")
        raise HTTPException(status_code=409, detail="Section with this title already exists in this portfolio")
    updated = section_repo.update_section(db, section_id, section)
    record_operation("section", "update")
    return {"message": "Section updated successfully", "data": schemas.Section.model_validate(updated)}


@router.delete("/own/{section_id}", response_model=schemas.MessageResponse)
def delete_section_endpoint(
    section_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, section_id)
    require_owner(existing, owner_id)
    try:
        section_repo.delete_section(db, section_id)
    except RuntimeError as exc:
        record_operation("section", "delete", "error")
        logger.error("section_delete_failed: id=%s error=%s", section_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete section")
    record_operation("section", "delete")
    return {"message": "Section deleted successfully"}


@router.get("/public/{section_id}", response_model=schemas.Envelope[schemas.SectionWithContents])
def get_public_section(section_id: int, db: Session = Depends(get_db)):
    db_section = section_repo.get_section_with_contents(db, section_id)
    if not db_section:
        raise HTTPException(status_code=404, detail="Section not found")
    return {
        "message": "Section retrieved successfully",
        "data": schemas.SectionWithContents.model_validate(db_section),
    }


@router.get("/portfolio/{portfolio_id}", response_model=schemas.Envelope[List[schemas.SectionWithContents]])
def get_sections_for_portfolio(portfolio_id: int, db: Session = Depends(get_db)):
    if not portfolio_repo.get_portfolio(db, portfolio_id):
        raise HTTPException(status_code=404, detail="Portfolio not found")
    items = section_repo.get_sections_by_portfolio(db, portfolio_id, with_contents=True)
    return {
        "message": "Sections retrieved successfully",
        "data": [schemas.SectionWithContents.model_validate(s) for s in items],
    }


@router.get("/type", response_model=schemas.Envelope[List[schemas.Section]])
def get_sections_of_type(
    section_type: Optional[str] = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
):
    if not section_type or not section_type.strip():
        raise HTTPException(status_code=400, detail="Section type is required")
    items = section_repo.get_sections_by_type(db, section_type.strip())
    return {
        "message": "Sections retrieved successfully",
        "data": [schemas.Section.model_validate(s) for s in items],
    }


@router.get("/{section_id}/contents", response_model=schemas.Envelope[List[schemas.SectionContent]])
def get_section_contents(section_id: int, db: Session = Depends(get_db)):
    _get_or_404(db, section_id)
    items = content_repo.get_contents_by_section(db, section_id)
    return {
        "message": "Section contents retrieved successfully",
        "data": [schemas.SectionContent.model_validate(c) for c in items],
    }
