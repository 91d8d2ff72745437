"""
Health, readiness and metrics endpoints for the auth service.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse, Response

from auth_service import metrics
from auth_service.db import database
from auth_service.db.database import get_db
from auth_service.db.repositories import users as user_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["support"])


def refresh_gauges(db: Session) -> None:
    """Update the registered-user and connection-pool gauges."""
    try:
        metrics.set_active_users(user_repo.count_users(db))
    except SQLAlchemyError as exc:
        logger.warning("active_users_refresh_failed: error=%s", exc)
    metrics.set_pool_stats(*database.pool_stats())


@router.api_route("/health", methods=["GET", "HEAD"])
def health():
    if not database.ping():
        return JSONResponse(status_code=503, content={"status": "error", "database": "unreachable"})
    return {"status": "ok", "database": "connected", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready(db: Session = Depends(get_db)):
    try:
        user_repo.count_users(db)
    except SQLAlchemyError as exc:
        logger.error("readiness_check_failed: error=%s", exc)
        return JSONResponse(status_code=503, content={"ready": False, "reason": "database query failed"})
    return {"ready": True, "database": "operational"}


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics(db: Session = Depends(get_db)):
    refresh_gauges(db)
    body, content_type = metrics.render_latest()
    return Response(content=body, media_type=content_type)
