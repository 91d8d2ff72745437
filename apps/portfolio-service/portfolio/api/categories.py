"""
Category API endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.db import schemas
from portfolio.db.database import get_db
from portfolio.db.repositories import categories as category_repo
from portfolio.db.repositories import portfolios as portfolio_repo
from portfolio.db.repositories import projects as project_repo
from portfolio.api.deps import Pagination, get_current_owner, require_owner
from portfolio.metrics import record_operation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["categories"])


def _get_or_404(db: Session, category_id: int):
    db_category = category_repo.get_category(db, category_id)
    if not db_category:
        raise HTTPException(status_code=404, detail="Category not found")
    return db_category


@router.get("/own", response_model=schemas.PaginatedEnvelope[schemas.Category])
def list_own_categories(
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    items = category_repo.get_categories_by_owner(db, owner_id, skip=pagination.offset, limit=pagination.limit)
    return {
        "message": "Categories retrieved successfully",
        "data": [schemas.Category.model_validate(c) for c in items],
        "page": pagination.page,
        "limit": pagination.limit,
    }


@router.post("/own", response_model=schemas.Envelope[schemas.Category], status_code=status.HTTP_201_CREATED)
def create_category_endpoint(
    category: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    parent = portfolio_repo.get_portfolio(db, category.portfolio_id)
    if not parent:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    require_owner(parent, owner_id)
    created = category_repo.create_category(db, category, owner_id)
    record_operation("category", "create")
    logger.info("category_created: id=%s portfolio_id=%s position=%s", created.id, created.portfolio_id, created.position)
    return {"message": "Category created successfully", "data": schemas.Category.model_validate(created)}


@router.put("/own/{category_id}", response_model=schemas.Envelope[schemas.Category])
def update_category_endpoint(
    category_id: int,
    category: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, category_id)
    require_owner(existing, owner_id)
    updated = category_repo.update_category(db, category_id, category)
    record_operation("category", "update")
    return {"message": "Category updated successfully", "data": schemas.Category.model_validate(updated)}


@router.delete("/own/{category_id}", response_model=schemas.MessageResponse)
def delete_category_endpoint(
    category_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, category_id)
    require_owner(existing, owner_id)
    try:
        category_repo.delete_category(db, category_id)
    except RuntimeError as exc:
        record_operation("category", "delete", "error")
        logger.error("category_delete_failed: id=%s error=%s", category_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete category")
    record_operation("category", "delete")
    return {"message": "Category deleted successfully"}


@router.get("/id/{category_id}", response_model=schemas.Envelope[schemas.Category])
def get_category_basic(category_id: int, db: Session = Depends(get_db)):
    db_category = _get_or_404(db, category_id)
    return {"message": "Category retrieved successfully", "data": schemas.Category.model_validate(db_category)}


@router.get("/public/{category_id}", response_model=schemas.Envelope[schemas.CategoryWithProjects])
def get_public_category(category_id: int, db: Session = Depends(get_db)):
    db_category = category_repo.get_category_with_projects(db, category_id)
    if not db_category:
        raise HTTPException(status_code=404, detail="Category not found")
    return {
        "message": "Category retrieved successfully",
        "data": schemas.CategoryWithProjects.model_validate(db_category),
    }


@router.get("/public/{category_id}/projects", response_model=schemas.Envelope[List[schemas.Project]])
def get_public_category_projects(category_id: int, db: Session = Depends(get_db)):
    _get_or_404(db, category_id)
    items = project_repo.get_projects_by_category(db, category_id)
    return {
        "message": "Projects retrieved successfully",
        "data": [schemas.Project.model_validate(p) for p in items],
    }
