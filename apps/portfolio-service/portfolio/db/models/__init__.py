"""
Domain-split SQLAlchemy models with a compatibility aggregator.

Exposes `Base`, `now_utc`, and all ORM classes so callers can use
`from portfolio.db import models` and `models.Portfolio`.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .portfolios import Portfolio
from .categories import Category
from .projects import Project
from .sections import Section, SectionContent

__all__ = [
    # base
    "Base",
    "now_utc",
    # portfolio tree
    "Portfolio",
    "Category",
    "Project",
    "Section",
    "SectionContent",
]
