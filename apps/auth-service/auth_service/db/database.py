"""
Database engine and session management for the auth service.

Builds the SQLAlchemy engine from ``DATABASE_URL`` or the ``DB_*`` variables
(each with a local default), falls back to in-memory SQLite under pytest and
exposes the session dependency plus pool statistics for metrics.
"""
import logging
import os
import sys
from typing import Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _get_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "password")
    name = os.getenv("DB_NAME", "authdb")
    sslmode = os.getenv("DB_SSLMODE", "disable")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


def migration_database_url() -> str:
    """URL Alembic migrates: `TEST_DATABASE_URL` when set, otherwise the runtime URL."""
    return os.getenv("TEST_DATABASE_URL") or _get_database_url()


def _is_pytest_runtime() -> bool:
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


explicit_test_db = os.getenv("TEST_DATABASE_URL")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif _is_pytest_runtime():
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    DATABASE_URL = _get_database_url()
    # 10 idle + 90 overflow = 100 open connections, recycled hourly
    _engine_kwargs = {
        "pool_size": 10,
        "max_overflow": 90,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }

engine = create_engine(DATABASE_URL, **_engine_kwargs)

if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    from auth_service.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        logger.error("database_ping_failed: error=%s", exc)
        return False


def pool_stats() -> Tuple[int, int]:
    """Return ``(checked_out, idle)`` connection counts for the engine pool.

    Pools without the queue-pool counters (e.g. ``StaticPool``) report zeros.
    """
    pool = engine.pool
    checked_out = getattr(pool, "checkedout", None)
    checked_in = getattr(pool, "checkedin", None)
    active = checked_out() if callable(checked_out) else 0
    idle = checked_in() if callable(checked_in) else 0
    return active, idle
