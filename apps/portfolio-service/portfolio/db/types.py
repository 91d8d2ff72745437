"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from typing import List

from sqlalchemy import Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, TypeDecorator


class StringList(TypeDecorator[List[str]]):
    """Store a list of strings as a native PostgreSQL ``text[]``.

    Falls back to JSON storage on dialects without array support
    (e.g. SQLite during unit tests). ``None`` reads back as an empty list.
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.ARRAY(Text))
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, str):
            raise TypeError("StringList expects a sequence of strings, got a bare string")
        return [str(v) for v in value]

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                # Postgres array literal "{a,b}"
                stripped = value.strip("{}")
                return [part for part in stripped.split(",") if part] if stripped else []
            return [str(v) for v in parsed] if isinstance(parsed, list) else []
        return [str(v) for v in value]

    def copy(self, **kwargs):  # type: ignore[override]
        return StringList()
