import os

import jwt
import pytest

# Pin auth configuration before the app is imported
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from fastapi.testclient import TestClient

import portfolio.db.database as db_module
from portfolio.db import models
from portfolio.api.main import app


@pytest.fixture(autouse=True)
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    models.Base.metadata.drop_all(bind=db_module.engine)
    models.Base.metadata.create_all(bind=db_module.engine)
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def _override_get_db(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[db_module.get_db] = _get_db
    yield
    app.dependency_overrides.pop(db_module.get_db, None)


@pytest.fixture
def client():
    return TestClient(app)


TEST_SECRET = "test-jwt-secret"


def _make_token(user_id, secret: str = TEST_SECRET, **extra) -> str:
    claims = {"user_id": user_id}
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def make_token():
    return _make_token


@pytest.fixture
def headers_for():
    def _headers(user_id):
        return {"Authorization": f"Bearer {_make_token(user_id)}"}
    return _headers


@pytest.fixture
def alice(headers_for):
    return headers_for(1)


@pytest.fixture
def bob(headers_for):
    return headers_for(2)
