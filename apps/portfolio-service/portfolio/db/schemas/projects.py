from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ProjectBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    images: List[str] = []
    main_image: Optional[str] = None
    skills: List[str] = []
    client: Optional[str] = None
    link: Optional[str] = None


class ProjectCreate(ProjectBase):
    category_id: int
    position: Optional[int] = Field(default=None, ge=0)


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    images: Optional[List[str]] = None
    main_image: Optional[str] = None
    skills: Optional[List[str]] = None
    client: Optional[str] = None
    link: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)


class Project(ProjectBase):
    id: int
    position: int
    category_id: int
    owner_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
