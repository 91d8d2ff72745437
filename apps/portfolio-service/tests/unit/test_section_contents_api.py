import pytest


@pytest.fixture
def section_id(client, alice):
    pid = client.post("/api/portfolios/own", json={"title": "Main"}, headers=alice).json()["data"]["id"]
    r = client.post(
        "/api/sections/own",
        json={"title": "About", "type": "about", "portfolio_id": pid},
        headers=alice,
    )
    return r.json()["data"]["id"]


def _content(client, headers, section_id, content="Hello", **extra):
    payload = {"section_id": section_id, "content": content}
    payload.update(extra)
    r = client.post("/api/section-contents/own", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_content_defaults(client, alice, section_id):
    first = _content(client, alice, section_id)
    second = _content(client, alice, section_id, "https://img/a.png", type="image", metadata={"alt": "A"})
    assert (first["type"], first["order"], first["metadata"]) == ("text", 0, None)
    assert (second["type"], second["order"]) == ("image", 1)
    assert second["metadata"] == {"alt": "A"}

    r = client.get(f"/api/section-contents/{second['id']}")
    assert r.json()["data"]["metadata"] == {"alt": "A"}


def test_create_content_rejects_unknown_type(client, alice, section_id):
    r = client.post(
        "/api/section-contents/own",
        json={"section_id": section_id, "content": "x", "type": "video"},
        headers=alice,
    )
    assert r.status_code == 400


def test_create_content_order_collision(client, alice, section_id):
    _content(client, alice, section_id, order=0)
    r = client.post(
        "/api/section-contents/own",
        json={"section_id": section_id, "content": "dup", "order": 0},
        headers=alice,
    )
    assert r.status_code == 409


def test_create_content_requires_owned_section(client, bob, section_id):
    r = client.post("/api/section-contents/own", json={"section_id": section_id, "content": "x"}, headers=bob)
    assert r.status_code == 403
    r = client.post("/api/section-contents/own", json={"section_id": 9999, "content": "x"}, headers=bob)
    assert r.status_code == 404


def test_update_content(client, alice, bob, section_id):
    a = _content(client, alice, section_id, "A")
    _content(client, alice, section_id, "B")

    r = client.put(f"/api/section-contents/own/{a['id']}", json={"order": 1}, headers=alice)
    assert r.status_code == 409
    r = client.put(
        f"/api/section-contents/own/{a['id']}",
        json={"content": "A2", "metadata": {"k": 1}, "order": 0},
        headers=alice,
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["content"] == "A2"
    assert r.json()["data"]["metadata"] == {"k": 1}
    assert client.put(f"/api/section-contents/own/{a['id']}", json={"content": "x"}, headers=bob).status_code == 403


def test_patch_order_allows_transient_collision(client, alice, section_id):
    a = _content(client, alice, section_id, "A")
    _content(client, alice, section_id, "B")
    r = client.patch(f"/api/section-contents/own/{a['id']}/order", json={"order": 1}, headers=alice)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["order"] == 1


def test_bulk_reorder(client, alice, bob, section_id):
    a = _content(client, alice, section_id, "A")
    b = _content(client, alice, section_id, "B")
    r = client.patch(
        "/api/section-contents/own/reorder",
        json=[{"id": a["id"], "order": 1}, {"id": b["id"], "order": 0}],
        headers=alice,
    )
    assert r.status_code == 200, r.text
    assert [c["content"] for c in r.json()["data"]] == ["B", "A"]

    r = client.get(f"/api/sections/{section_id}/contents")
    assert [c["content"] for c in r.json()["data"]] == ["B", "A"]

    r = client.patch("/api/section-contents/own/reorder", json=[{"id": a["id"], "order": 3}], headers=bob)
    assert r.status_code == 403
    r = client.patch("/api/section-contents/own/reorder", json=[{"id": 9999, "order": 3}], headers=alice)
    assert r.status_code == 404
    r = client.patch("/api/section-contents/own/reorder", json=[], headers=alice)
    assert r.status_code == 400


def test_delete_content(client, alice, section_id):
    a = _content(client, alice, section_id)
    r = client.delete(f"/api/section-contents/own/{a['id']}", headers=alice)
    assert r.json() == {"message": "Section content deleted successfully"}
    assert client.get(f"/api/section-contents/{a['id']}").status_code == 404
