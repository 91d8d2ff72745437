"""
Project API endpoints.

Owner-scoped CRUD, public reads, per-category listing and search by skills
or client.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from portfolio.db import schemas
from portfolio.db.database import get_db
from portfolio.db.repositories import categories as category_repo
from portfolio.db.repositories import projects as project_repo
from portfolio.api.deps import Pagination, get_current_owner, require_owner
from portfolio.metrics import record_operation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _get_or_404(db: Session, project_id: int):
    db_project = project_repo.get_project(db, project_id)
    if not db_project:
        raise HTTPException(status_code=404, detail="Project not found")
    return db_project


def _split_skills(raw: Optional[List[str]]) -> List[str]:
    """Accept both ``?skills=a&skills=b`` and ``?skills=a,b``."""
    skills: List[str] = []
    for value in raw or []:
        skills.extend(part.strip() for part in value.split(",") if part.strip())
    return skills


@router.get("/own", response_model=schemas.PaginatedEnvelope[schemas.Project])
def list_own_projects(
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    items = project_repo.get_projects_by_owner(db, owner_id, skip=pagination.offset, limit=pagination.limit)
    return {
        "message": "Projects retrieved successfully",
        "data": [schemas.Project.model_validate(p) for p in items],
        "page": pagination.page,
        "limit": pagination.limit,
    }


@router.get("/own/{project_id}", response_model=schemas.Envelope[schemas.Project])
def get_own_project(
    project_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    db_project = _get_or_404(db, project_id)
    require_owner(db_project, owner_id)
    return {"message": "Project retrieved successfully", "data": schemas.Project.model_validate(db_project)}


@router.post("/own", response_model=schemas.Envelope[schemas.Project], status_code=status.HTTP_201_CREATED)
def create_project_endpoint(
    project: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    parent = category_repo.get_category(db, project.category_id)
    if not parent:
        raise HTTPException(status_code=404, detail="Category not found")
    require_owner(parent, owner_id)
    if project_repo.check_duplicate_project(db, project.title, project.category_id):
        record_operation("project", "create", "conflict")
        raise HTTPException(status_code=409, detail="Project with this title already exists in this category")
    created = project_repo.create_project(db, project, owner_id)
    record_operation("project", "create")
    logger.info("project_created: id=%s category_id=%s position=%s", created.id, created.category_id, created.position)
    return {"message": "Project created successfully", "data": schemas.Project.model_validate(created)}


@router.put("/own/{project_id}", response_model=schemas.Envelope[schemas.Project])
def update_project_endpoint(
    project_id: int,
    project: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, project_id)
    require_owner(existing, owner_id)
    if project.title is not None and project_repo.check_duplicate_project(
        db, project.title, existing.category_id, exclude_id=project_id
    ):
        record_operation("project", "update", "conflict")
        raise HTTPException(status_code=409, detail="Project with this title already exists in this category")
    updated = project_repo.update_project(db, project_id, project)
    record_operation("project", "update")
    return {"message": "Project updated successfully", "data": schemas.Project.model_validate(updated)}


@router.delete("/own/{project_id}", response_model=schemas.MessageResponse)
def delete_project_endpoint(
    project_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    existing = _get_or_404(db, project_id)
    require_owner(existing, owner_id)
    try:
        project_repo.delete_project(db, project_id)
    except RuntimeError as exc:
        record_operation("project", "delete", "error")
        logger.error("project_delete_failed: id=%s error=%s", project_id, exc)
        raise HTTPException(status_code=500, detail="Failed to delete project")
    record_operation("project", "delete")
    return {"message": "Project deleted successfully"}


@router.get("/public/{project_id}", response_model=schemas.Envelope[schemas.Project])
def get_public_project(project_id: int, db: Session = Depends(get_db)):
    db_project = _get_or_404(db, project_id)
    return {"message": "Project retrieved successfully", "data": schemas.Project.model_validate(db_project)}


@router.get("/category/{category_id}", response_model=schemas.Envelope[List[schemas.Project]])
def get_projects_for_category(category_id: int, db: Session = Depends(get_db)):
    if not category_repo.get_category(db, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    items = project_repo.get_projects_by_category(db, category_id)
    return {
        "message": "Projects retrieved successfully",
        "data": [schemas.Project.model_validate(p) for p in items],
    }


@router.get("/search/skills", response_model=schemas.Envelope[List[schemas.Project]])
def search_projects_by_skills(
    skills: Optional[List[str]] = Query(default=None),
    db: Session = Depends(get_db),
):
    wanted = _split_skills(skills)
    if not wanted:
        raise HTTPException(status_code=400, detail="At least one skill is required")
    items = project_repo.get_projects_by_skills(db, wanted)
    return {
        "message": "Projects retrieved successfully",
        "data": [schemas.Project.model_validate(p) for p in items],
    }


@router.get("/search/client", response_model=schemas.Envelope[List[schemas.Project]])
def search_projects_by_client(
    client: Optional[str] = None,
    db: Session = Depends(get_db),
):
    if not client or not client.strip():
        raise HTTPException(status_code=400, detail="Client name is required")
    items = project_repo.get_projects_by_client(db, client.strip())
    return {
        "message": "Projects retrieved successfully",
        "data": [schemas.Project.model_validate(p) for p in items],
    }
