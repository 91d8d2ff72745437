"""
Domain-split Pydantic schemas with a compatibility aggregator.

Callers use `from portfolio.db import schemas` and `schemas.Portfolio`.
"""

# Import order: leaves first so relation schemas can reference them
from .common import Envelope, PaginatedEnvelope, MessageResponse
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project
from .categories import CategoryBase, CategoryCreate, CategoryUpdate, Category, CategoryWithProjects
from .sections import (
    ContentTypeEnum,
    SectionBase,
    SectionCreate,
    SectionUpdate,
    Section,
    SectionWithContents,
    SectionContentBase,
    SectionContentCreate,
    SectionContentUpdate,
    SectionContentOrderUpdate,
    SectionContentReorderItem,
    SectionContent,
)
from .portfolios import (
    PortfolioBase,
    PortfolioCreate,
    PortfolioUpdate,
    Portfolio,
    PortfolioWithRelations,
)

__all__ = [
    # Envelopes
    "Envelope",
    "PaginatedEnvelope",
    "MessageResponse",
    # Projects
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    # Categories
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "Category",
    "CategoryWithProjects",
    # Sections
    "ContentTypeEnum",
    "SectionBase",
    "SectionCreate",
    "SectionUpdate",
    "Section",
    "SectionWithContents",
    "SectionContentBase",
    "SectionContentCreate",
    "SectionContentUpdate",
    "SectionContentOrderUpdate",
    "SectionContentReorderItem",
    "SectionContent",
    # Portfolios
    "PortfolioBase",
    "PortfolioCreate",
    "PortfolioUpdate",
    "Portfolio",
    "PortfolioWithRelations",
]
