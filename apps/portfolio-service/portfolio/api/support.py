"""
Service health and build information endpoints.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone

from fastapi import APIRouter
from starlette.responses import JSONResponse

from portfolio.db import database

router = APIRouter(tags=["support"])


@router.get("/health")
def health():
    now = datetime.now(timezone.utc).isoformat()
    if not database.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unreachable", "timestamp": now},
        )
    return {"status": "ok", "database": "connected", "timestamp": now}


@router.get("/ready")
def ready():
    if not database.ping():
        return JSONResponse(status_code=503, content={"ready": False, "database": "unreachable"})
    return {"ready": True, "database": "operational"}


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    build_sha = os.getenv("BUILD_SHA")
    build_timestamp = os.getenv("BUILD_TIMESTAMP")
    image_tag = os.getenv("IMAGE_TAG")

    return {
        "build_sha": build_sha if build_sha else None,
        "build_timestamp": build_timestamp if build_timestamp else None,
        "image_tag": image_tag if image_tag else None,
        "service_name": os.getenv("SERVICE_NAME", "portfolio-service"),
        "version": os.getenv("VERSION", "unknown"),
    }
