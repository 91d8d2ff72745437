"""
Portfolio API endpoints.

Owner-scoped CRUD under ``/own`` plus public reads of a portfolio and its
categories and sections.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.db import schemas
from portfolio.db.database import get_db
from portfolio.db.repositories import categories as category_repo
from portfolio.db.repositories import portfolios as portfolio_repo
from portfolio.db.repositories import sections as section_repo
from portfolio.api.deps import Pagination, get_current_owner, require_owner
from portfolio.metrics import record_operation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolios", tags=["portfolios"])


def _get_or_404(db: Session, portfolio_id: int):
    db_portfolio = portfolio_repo.get_portfolio(db, portfolio_id)
    if not db_portfolio:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    return db_portfolio


@router.get("/own", response_model=schemas.PaginatedEnvelope[schemas.Portfolio])
def list_own_portfolios(
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    items = portfolio_repo.get_portfolios_by_owner(db, owner_id, skip=pagination.offset, limit=pagination.limit)
    return {
        "message": "Portfolios retrieved successfully",
        "data": [schemas.Portfolio.model_validate(p) for p in items],
        "page": pagination.page,
        "limit": pagination.limit,
    }


@router.post("/own", response_model=schemas.Envelope[schemas.Portfolio], status_code=status.HTTP_201_CREATED)
def create_portfolio_endpoint(
    portfolio: schemas.PortfolioCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    if portfolio_repo.check_duplicate_portfolio(db, portfolio.title, owner_id):
        record_operation("portfolio", "create", "conflict")
        raise HTTPException(status_code=409, detail="Portfolio with this title already exists")
    created = portfolio_repo.create_portfolio(db, portfolio, owner_id)
    record_operation("portfolio", "create")
    logger.info("portfolio_created: id=%s owner_id=%s", created.id, owner_id)
    return {"message": "Portfolio created successfully", "data": schemas.Portfolio.model_validate(created)}


@router.put("/own/{portfolio_id}", response_model=schemas.Envelope[schemas.Portfolio])
def update_portfolio_endpoint(
    portfolio_id: int,
    portfolio: schemas.PortfolioUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, portfolio_id)
    require_owner(existing, owner_id)
    if portfolio.title is not None and portfolio_repo.check_duplicate_portfolio(
        db, portfolio.title, owner_id, exclude_id=portfolio_id
    ):
        record_operation("portfolio", "update", "conflict")
        raise HTTPException(status_code=409, detail="Portfolio with this title already exists")
    updated = portfolio_repo.update_portfolio(db, portfolio_id, portfolio)
    record_operation("portfolio", "update")
    return {"message": "Portfolio updated successfully", "data": schemas.Portfolio.model_validate(updated)}


@router.delete("/own/{portfolio_id}", response_model=schemas.MessageResponse)
def delete_portfolio_endpoint(
    portfolio_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, portfolio_id)
    require_owner(existing, owner_id)
    try:
        portfolio_repo.delete_portfolio(db, portfolio_id)
    except RuntimeError as exc:
        record_operation("portfolio", "delete", "error")
        logger.error("portfolio_delete_failed: id=%s error=%s", portfolio_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete portfolio")
    record_operation("portfolio", "delete")
    logger.info("portfolio_deleted: id=%s owner_id=%s", portfolio_id, owner_id)
    return {"message": "Portfolio deleted successfully"}


@router.get("/id/{portfolio_id}", response_model=schemas.Envelope[schemas.PortfolioWithRelations])
@router.get("/public/{portfolio_id}", response_model=schemas.Envelope[schemas.PortfolioWithRelations])
def get_public_portfolio(portfolio_id: int, db: Session = Depends(get_db)):
    db_portfolio = portfolio_repo.get_portfolio_with_relations(db, portfolio_id)
    if not db_portfolio:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    return {
        "message": "Portfolio retrieved successfully",
        "data": schemas.PortfolioWithRelations.model_validate(db_portfolio),
    }


@router.get("/public/{portfolio_id}/categories", response_model=schemas.Envelope[List[schemas.Category]])
def get_public_portfolio_categories(portfolio_id: int, db: Session = Depends(get_db)):
    _get_or_404(db, portfolio_id)
    items = category_repo.get_categories_by_portfolio(db, portfolio_id)
    return {
        "message": "Categories retrieved successfully",
        "data": [schemas.Category.model_validate(c) for c in items],
    }


@router.get("/public/{portfolio_id}/sections", response_model=schemas.Envelope[List[schemas.Section]])
def get_public_portfolio_sections(portfolio_id: int, db: Session = Depends(get_db)):
    _get_or_404(db, portfolio_id)
    items = section_repo.get_sections_by_portfolio(db, portfolio_id)
    return {
        "message": "Sections retrieved successfully",
        "data": [schemas.Section.model_validate(s) for s in items],
    }
