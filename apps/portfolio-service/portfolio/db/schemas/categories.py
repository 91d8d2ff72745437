from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .projects import Project


class CategoryBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    portfolio_id: int
    position: Optional[int] = Field(default=None, ge=0)


class CategoryUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)


class Category(CategoryBase):
    id: int
    position: int
    portfolio_id: int
    owner_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CategoryWithProjects(Category):
    projects: List[Project] = []
