from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .categories import Category
from .sections import Section


class PortfolioBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class PortfolioCreate(PortfolioBase):
    pass


class PortfolioUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class Portfolio(PortfolioBase):
    id: int
    owner_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PortfolioWithRelations(Portfolio):
    categories: List[Category] = []
    sections: List[Section] = []
