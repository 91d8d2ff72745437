import pytest
from fastapi import HTTPException

from portfolio.api import deps
from portfolio.utils.tokens import TokenError, owner_id_from_claims, parse_bearer


def test_missing_header_is_rejected(client):
    r = client.get("/api/portfolios/own")
    assert r.status_code == 401
    assert r.json()["error"] == "Authorization header required"


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer a b", "bearer abc"])
def test_malformed_header_is_rejected(client, header):
    r = client.get("/api/portfolios/own", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid authorization format"


def test_bad_signature_and_garbage_tokens_are_invalid(client, make_token):
    forged = make_token(1, secret="someone-elses-secret")
    for token in (forged, "not-a-jwt"):
        r = client.get("/api/portfolios/own", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["error"] == "Invalid token"


def test_expired_token_is_invalid(client, make_token):
    token = make_token(1, exp=1)
    r = client.get("/api/portfolios/own", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid token"


def test_token_without_user_id_has_invalid_claims(client, make_token):
    token = make_token(None, sub="someone")
    r = client.get("/api/portfolios/own", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid token claims"


def test_owner_id_is_stringified():
    assert owner_id_from_claims({"user_id": 42}) == "42"
    with pytest.raises(TokenError):
        owner_id_from_claims({})


def test_parse_bearer_returns_token():
    assert parse_bearer("Bearer abc.def") == "abc.def"
    with pytest.raises(TokenError):
        parse_bearer(None)


def test_normalize_pagination():
    assert deps.normalize_pagination(None, None) == (1, 10)
    assert deps.normalize_pagination(-3, 0) == (1, 10)
    assert deps.normalize_pagination(4, 100) == (4, 100)
    assert deps.normalize_pagination(2, 101) == (2, 10)
    assert deps.normalize_pagination("abc", "xyz") == (1, 10)
    assert deps.normalize_pagination("3", " 20 ") == (3, 20)
    assert deps.normalize_pagination(10**20, 10) == (deps.MAX_PAGE, 10)


def test_require_owner_raises_forbidden():
    class Row:
        owner_id = "1"

    deps.require_owner(Row(), "1")
    with pytest.raises(HTTPException) as exc:
        deps.require_owner(Row(), "2")
    assert exc.value.status_code == 403



def test_dev_mode_env_does_not_bypass_token_check(client, monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    r = client.post("/api/portfolios/own", json={"title": "Dev"})
    assert r.status_code == 401
    assert r.json()["error"] == "Authorization header required"
