"""
Per-domain repository modules for database access.

Each module exposes plain functions taking a SQLAlchemy `Session`; routers
import them as `from portfolio.db.repositories import projects as project_repo`.
"""
