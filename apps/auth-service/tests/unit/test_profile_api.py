from auth_service.api import deps
from auth_service.utils.security import create_access_token


def test_profile_requires_token(client):
    r = client.get("/api/profile")
    assert r.status_code == 401
    assert r.json()["error"] == "Authorization header required"

    r = client.get("/api/profile", headers={"Authorization": "Token abc"})
    assert r.json()["error"] == "Invalid authorization format"

    r = client.get("/api/profile", headers={"Authorization": "Bearer nope"})
    assert r.json()["error"] == "Invalid token"


def test_get_profile(client, register):
    created, headers = register()
    r = client.get("/api/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == created["user"]["id"]
    assert r.json()["email"] == "alice@example.com"


def test_token_for_missing_user_is_rejected(client):
    headers = {"Authorization": f"Bearer {create_access_token(4242)}"}
    r = client.get("/api/profile", headers=headers)
    assert r.status_code == 401
    assert r.json()["error"] == "User not found"


def test_update_profile(client, register):
    _, headers = register()
    register("bob", "bob@example.com")

    r = client.put("/api/profile", json={"username": "bob", "email": "alice@example.com"}, headers=headers)
    assert r.status_code == 409
    assert r.json()["error"] == "Username or email already exists"

    r = client.put("/api/profile", json={"username": "alice2", "email": "Alice2@Example.com"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["username"] == "alice2"
    assert r.json()["email"] == "alice2@example.com"

    # Keeping one's own values is allowed
    r = client.put("/api/profile", json={"username": "alice2", "email": "alice2@example.com"}, headers=headers)
    assert r.status_code == 200


def test_update_profile_requires_both_fields(client, register):
    _, headers = register()
    r = client.put("/api/profile", json={"username": "alice3"}, headers=headers)
    assert r.status_code == 400


def test_delete_profile(client, register):
    _, headers = register()
    r = client.delete("/api/profile", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"message": "User deleted successfully"}
    # Token still verifies but the user is gone
    r = client.get("/api/profile", headers=headers)
    assert r.status_code == 401
    assert r.json()["error"] == "User not found"


def test_list_users_paginates_newest_first(client, register):
    _, headers = register("alice", "alice@example.com")
    register("bob", "bob@example.com")
    register("carol", "carol@example.com")

    r = client.get("/api/users?page=1&limit=2", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert [u["username"] for u in body["data"]] == ["carol", "bob"]
    assert (body["page"], body["limit"], body["total"], body["total_pages"]) == (1, 2, 3, 2)

    body = client.get("/api/users?page=0&limit=1000", headers=headers).json()
    assert (body["page"], body["limit"]) == (1, 10)
    assert len(body["data"]) == 3

    assert client.get("/api/users").status_code == 401


def test_list_users_tolerates_bad_paging_values(client, register):
    _, headers = register("alice", "alice@example.com")

    r = client.get("/api/users?page=abc&limit=xyz", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert (body["page"], body["limit"], body["total"]) == (1, 10, 1)

    r = client.get("/api/users?page=99999999999999999999", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["page"] == deps.MAX_PAGE
    assert body["data"] == []


def test_update_profile_validation_error_body(client, register):
    _, headers = register()
    r = client.put("/api/profile", json={"username": "alice3"}, headers=headers)
    assert r.status_code == 400
    assert "email" in r.json()["error"]
