"""
Shared SQLAlchemy base and helpers.
"""
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    return datetime.now(UTC)


Base = declarative_base()
