from datetime import timedelta

from app.core.security import create_access_token
from tests.conftest import auth_headers

ALICE = auth_headers("alice")
BOB = auth_headers("bob")


async def _create_document(client, content="A"):
    r = await client.post("/documents", json={"title": "Handbook", "content": content}, headers=ALICE)
    assert r.status_code == 201
    return r.json()


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_create_and_get_document(client):
    created = await _create_document(client)

    assert created["owner_id"] == "alice"
    assert created["content"] == "A"
    assert created["current_version_id"] is not None
    assert created["current_version_number"] == 1

    r = await client.get(f"/documents/{created['id']}")
    assert r.status_code == 200
    assert r.json()["content"] == "A"


async def test_create_document_requires_identity(client):
    r = await client.post("/documents", json={"title": "Handbook", "content": "A"})
    assert r.status_code == 401
    assert r.json()["code"] == "unauthorized"


async def test_invalid_token_counts_as_anonymous(client):
    r = await client.post(
        "/documents",
        json={"title": "Handbook", "content": "A"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert r.status_code == 401


async def test_expired_token_counts_as_anonymous(client):
    token = create_access_token("alice", expires_delta=timedelta(seconds=-5))
    r = await client.post(
        "/documents",
        json={"title": "Handbook", "content": "A"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 401


async def test_get_unknown_document_is_404(client):
    r = await client.get("/documents/999")
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"


async def test_list_documents_mine(client):
    await _create_document(client)
    await client.post("/documents", json={"title": "Bob's", "content": "X"}, headers=BOB)

    r = await client.get("/documents", params={"mine": "true"}, headers=ALICE)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    assert body["documents"][0]["owner_id"] == "alice"

    r = await client.get("/documents")
    assert r.json()["total"] == 2


async def test_suggestion_review_flow(client):
    doc = await _create_document(client)

    r = await client.post(
        f"/documents/{doc['id']}/suggestions",
        json={
            "title": "Rewrite",
            "content": "B",
            "base_version_id": 999,
            "status": "accepted",
            "author_id": "mallory",
        },
        headers=BOB,
    )
    assert r.status_code == 201
    suggestion = r.json()
    assert suggestion["author_id"] == "bob"
    assert r.headers["location"] == f"/suggestions/{suggestion['id']}"
    assert suggestion["base_version_id"] == doc["current_version_id"]
    assert suggestion["description"] == ""
    assert suggestion["status"] == "pending"

    r = await client.get(f"/documents/{doc['id']}/suggestions")
    assert r.status_code == 200
    assert [s["id"] for s in r.json()["suggestions"]] == [suggestion["id"]]

    r = await client.post(f"/suggestions/{suggestion['id']}/accept", headers=BOB)
    assert r.status_code == 403

    r = await client.post(f"/suggestions/{suggestion['id']}/accept", headers=ALICE)
    assert r.status_code == 200
    version = r.json()
    assert version["content"] == "B"
    assert version["version_number"] == 2

    r = await client.get(f"/documents/{doc['id']}")
    assert r.json()["current_version_id"] == version["id"]
    assert r.json()["content"] == "B"

    r = await client.get(f"/documents/{doc['id']}/versions/{doc['current_version_id']}")
    assert r.status_code == 200
    assert r.json()["content"] == "A"

    r = await client.post(f"/suggestions/{suggestion['id']}/accept", headers=ALICE)
    assert r.status_code == 409
    assert r.json()["code"] == "already_resolved"

    r = await client.get(f"/documents/{doc['id']}/versions")
    assert r.json()["total"] == 2


async def test_submit_validation_and_identity(client):
    doc = await _create_document(client)
    url = f"/documents/{doc['id']}/suggestions"

    r = await client.post(url, json={"title": "", "content": "B"}, headers=BOB)
    assert r.status_code == 422

    r = await client.post(url, json={"title": "Fix", "content": "B"})
    assert r.status_code == 401

    r = await client.get(url)
    assert r.json()["total"] == 0


async def test_reject_and_stale_flag(client):
    doc = await _create_document(client)
    url = f"/documents/{doc['id']}/suggestions"
    s1 = (await client.post(url, json={"title": "One", "content": "B"}, headers=BOB)).json()
    s2 = (await client.post(url, json={"title": "Two", "content": "C"}, headers=BOB)).json()
    s3 = (await client.post(url, json={"title": "Three", "content": "D"}, headers=BOB)).json()

    r = await client.post(f"/suggestions/{s3['id']}/reject", headers=ALICE)
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"

    await client.post(f"/suggestions/{s1['id']}/accept", headers=ALICE)

    r = await client.get(f"/suggestions/{s2['id']}")
    assert r.json()["is_stale"] is True

    r = await client.get(url, params={"status": "pending"})
    assert [s["id"] for s in r.json()["suggestions"]] == [s2["id"]]


async def test_delete_by_non_owner_is_silent_no_op(client):
    doc = await _create_document(client)

    r = await client.delete(f"/documents/{doc['id']}", headers=BOB)
    assert r.status_code == 204

    r = await client.get(f"/documents/{doc['id']}")
    assert r.status_code == 200


async def test_delete_by_owner_removes_document(client):
    doc = await _create_document(client)
    s = (await client.post(
        f"/documents/{doc['id']}/suggestions", json={"title": "Fix", "content": "B"}, headers=BOB
    )).json()

    r = await client.delete(f"/documents/{doc['id']}", headers=ALICE)
    assert r.status_code == 204
    assert r.headers["location"] == "/documents"

    assert (await client.get(f"/documents/{doc['id']}")).status_code == 404
    assert (await client.get(f"/suggestions/{s['id']}")).status_code == 404


async def test_delete_unknown_document_is_silent(client):
    r = await client.delete("/documents/999", headers=ALICE)
    assert r.status_code == 204


async def test_list_suggestions_total_counts_past_page(client):
    doc = await _create_document(client)
    url = f"/documents/{doc['id']}/suggestions"
    for i in range(3):
        await client.post(url, json={"title": f"Fix {i}", "content": f"B{i}"}, headers=BOB)

    r = await client.get(url, params={"limit": 2})
    body = r.json()
    assert len(body["suggestions"]) == 2
    assert body["total"] == 3

    r = await client.get(url, params={"limit": 2, "offset": 2})
    assert [s["title"] for s in r.json()["suggestions"]] == ["Fix 2"]
