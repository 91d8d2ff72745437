"""
Project repository functions.

Implements CRUD, category listing, position updates, skill/client search and
the per-category duplicate title check.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy import Text, func, type_coerce
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Session

from portfolio.db import models, schemas

_REQUIRED = ("title", "description", "position")


def next_project_position(db: Session, category_id: int) -> int:
    current = (
        db.query(func.max(models.Project.position))
        .filter(models.Project.category_id == category_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def create_project(db: Session, project: schemas.ProjectCreate, owner_id: str):
    position = project.position
    if position is None:
        position = next_project_position(db, project.category_id)
    db_project = models.Project(
        title=project.title,
        description=project.description,
        images=list(project.images or []),
        main_image=project.main_image,
        skills=list(project.skills or []),
        client=project.client,
        link=project.link,
        position=position,
        category_id=project.category_id,
        owner_id=owner_id,
    )
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    return db_project


def get_project(db: Session, project_id: int):
    return db.query(models.Project).filter(models.Project.id == project_id).first()


def get_projects_by_owner(db: Session, owner_id: str, skip: int = 0, limit: int = 10):
    return (
        db.query(models.Project)
        .filter(models.Project.owner_id == owner_id)
        .order_by(models.Project.position.asc(), models.Project.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_projects_by_category(db: Session, category_id: int):
    return (
        db.query(models.Project)
        .filter(models.Project.category_id == category_id)
        .order_by(models.Project.position.asc(), models.Project.created_at.asc())
        .all()
    )


def list_projects(db: Session, skip: int = 0, limit: int = 10):
    return db.query(models.Project).order_by(models.Project.id).offset(skip).limit(limit).all()


def update_project(db: Session, project_id: int, project: schemas.ProjectUpdate):
    db_project = get_project(db, project_id)
    if db_project:
        for key, value in project.model_dump(exclude_unset=True).items():
            if value is None and key in _REQUIRED:
                continue
            if key in ("images", "skills") and value is None:
                value = []
            setattr(db_project, key, value)
        db.commit()
        db.refresh(db_project)
    return db_project


def update_project_position(db: Session, project_id: int, position: int):
    db_project = get_project(db, project_id)
    if db_project:
        db_project.position = position
        db.commit()
        db.refresh(db_project)
    return db_project


def delete_project(db: Session, project_id: int) -> bool:
    try:
        db_project = get_project(db, project_id)
        if not db_project:
            return False
        db.delete(db_project)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete project {project_id}: {str(e)}")


def get_projects_by_skills(db: Session, skills: List[str]):
    """Projects tagged with at least one of `skills`.

    Uses the array overlap operator on PostgreSQL; other dialects store the
    list as JSON, so the match is done after loading.
    """
    wanted = [s for s in skills if s]
    if not wanted:
        return []
    q = db.query(models.Project).order_by(models.Project.id)
    if db.get_bind().dialect.name == "postgresql":
        column = type_coerce(models.Project.skills, postgresql.ARRAY(Text))
        return q.filter(column.overlap(postgresql.array(wanted, type_=Text))).all()
    wanted_set = set(wanted)
    return [p for p in q.all() if wanted_set.intersection(p.skills or [])]


def get_projects_by_client(db: Session, client: str):
    return (
        db.query(models.Project)
        .filter(models.Project.client == client)
        .order_by(models.Project.id)
        .all()
    )


def check_duplicate_project(
    db: Session,
    title: str,
    category_id: int,
    exclude_id: Optional[int] = None,
) -> bool:
    """True when `category_id` already holds a project titled `title` (other than `exclude_id`)."""
    q = db.query(models.Project).filter(
        models.Project.title == title,
        models.Project.category_id == category_id,
    )
    if exclude_id:
        q = q.filter(models.Project.id != exclude_id)
    return q.count() > 0
