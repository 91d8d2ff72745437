import os

import pytest

# Cheap hashes and a shared signing key before the app is imported
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from fastapi.testclient import TestClient

import auth_service.db.database as db_module
from auth_service.db import models
from auth_service.api.main import app


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


@pytest.fixture
def register(client):
    def _register(username="alice", email="alice@example.com", password="secret123"):
        r = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
        assert r.status_code == 201, r.text
        body = r.json()
        return body, {"Authorization": f"Bearer {body['token']}"}
    return _register
