"""
App assembly entry point.

Re-exports the FastAPI `app` from `portfolio.api.main` so the service can be
started with `uvicorn app:app` from this directory.
"""

from portfolio.api.main import app  # noqa: F401
