from datetime import timedelta

import jwt
import pytest

from auth_service.utils import security


def test_hash_and_verify_password():
    hashed = security.hash_password("secret123")
    assert hashed != "secret123"
    assert hashed.startswith("$2")
    assert security.verify_password("secret123", hashed) is True
    assert security.verify_password("wrong", hashed) is False


def test_verify_password_rejects_non_hash():
    assert security.verify_password("secret123", "plain-text") is False


def test_create_and_decode_token():
    token = security.create_access_token(7)
    claims = security.decode_token(token)
    assert claims["user_id"] == 7
    assert claims["exp"] > claims["iat"]


def test_expires_in_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRES_IN", "60")
    claims = security.decode_token(security.create_access_token(1))
    assert claims["exp"] - claims["iat"] == 60


def test_expired_token_raises_typed_error():
    token = security.create_access_token(7, expires_delta=timedelta(seconds=-10))
    with pytest.raises(security.TokenExpiredError):
        security.decode_token(token)


def test_foreign_secret_is_invalid():
    token = jwt.encode({"user_id": 1}, "other-secret", algorithm="HS256")
    with pytest.raises(security.TokenError) as exc:
        security.decode_token(token)
    assert str(exc.value) == "Invalid token"


def test_missing_user_id_claim():
    token = jwt.encode({"sub": "x"}, "test-jwt-secret", algorithm="HS256")
    with pytest.raises(security.TokenError) as exc:
        security.decode_token(token)
    assert str(exc.value) == "Invalid token claims"


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer", "Bearer a b"])
def test_parse_bearer_rejects(header):
    with pytest.raises(security.TokenError):
        security.parse_bearer(header)


def test_parse_bearer_accepts():
    assert security.parse_bearer("Bearer tok") == "tok"
