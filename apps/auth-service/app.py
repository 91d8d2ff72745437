"""
App assembly entry point.

Re-exports the FastAPI `app` from `auth_service.api.main` so the service can
be started with `uvicorn app:app` from this directory.
"""

from auth_service.api.main import app  # noqa: F401
