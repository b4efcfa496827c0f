"""Tests for invitations API: CRUD, status codes per error kind, send and register flow."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, body: dict) -> dict:
    r = await client.post("/invitations/", json=body)
    assert r.status_code == 200
    return r.json()


@pytest.mark.asyncio
async def test_create_returns_document_with_server_id(async_client: AsyncClient, ann):
    data = await _create(async_client, ann)
    assert data["id"]
    assert data["invitationState"] == "INITIAL"
    assert data["salutation"] == "INFORMAL_MALE"
    assert data["createdAt"] is not None


@pytest.mark.asyncio
async def test_create_with_client_id_returns_422(async_client: AsyncClient, ann):
    r = await async_client.post("/invitations/", json={**ann, "id": "client-chosen"})
    assert r.status_code == 422
    assert "client" in r.json()["detail"]


@pytest.mark.asyncio
async def test_create_with_colliding_id_returns_409(async_client: AsyncClient, ann):
    existing = await _create(async_client, ann)
    r = await async_client.post("/invitations/", json={**ann, "id": existing["id"]})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_create_without_email_returns_422(async_client: AsyncClient, ann):
    r = await async_client.post("/invitations/", json={**ann, "email": ""})
    assert r.status_code == 422
    assert "email" in r.json()["detail"]


@pytest.mark.asyncio
async def test_create_in_answered_state_returns_422(async_client: AsyncClient, ann):
    r = await async_client.post("/invitations/", json={**ann, "invitationState": "REGISTERED"})
    assert r.status_code == 422
    assert (await async_client.get("/invitations/")).json() == []


@pytest.mark.asyncio
async def test_read_unknown_returns_404(async_client: AsyncClient):
    r = await async_client.get("/invitations/does-not-exist")
    assert r.status_code == 404
    assert "detail" in r.json()


@pytest.mark.asyncio
async def test_update_ignores_created_fields(async_client: AsyncClient, ann):
    created = await _create(async_client, ann)
    body = {**created, "firstName": "Anna", "createdBy": "mallory", "createdAt": "2000-01-01T00:00:00Z"}

    r = await async_client.put(f"/invitations/{created['id']}", json=body)

    assert r.status_code == 200
    data = r.json()
    assert data["firstName"] == "Anna"
    assert data["createdBy"] == created["createdBy"]
    assert data["createdAt"] == created["createdAt"]


@pytest.mark.asyncio
async def test_update_state_change_returns_422(async_client: AsyncClient, ann):
    created = await _create(async_client, ann)
    r = await async_client.put(f"/invitations/{created['id']}", json={**ann, "invitationState": "SENT"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_delete_then_read_returns_404(async_client: AsyncClient, ann):
    created = await _create(async_client, ann)

    r = await async_client.delete(f"/invitations/{created['id']}")
    assert r.status_code == 204

    assert (await async_client.get(f"/invitations/{created['id']}")).status_code == 404
    assert (await async_client.delete(f"/invitations/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_list_pages_in_creation_order(async_client: AsyncClient, ann):
    created = [await _create(async_client, {**ann, "email": f"g{n}@x.com"}) for n in range(4)]

    r = await async_client.get("/invitations/", params={"position": 1, "size": 2})

    assert r.status_code == 200
    assert [d["id"] for d in r.json()] == [created[1]["id"], created[2]["id"]]


@pytest.mark.asyncio
async def test_list_query_is_inert(async_client: AsyncClient, ann):
    for n in range(3):
        await _create(async_client, {**ann, "email": f"g{n}@x.com"})

    plain = await async_client.get("/invitations/")
    queried = await async_client.get("/invitations/", params={"queryType": "email", "query": "g1@x.com"})

    assert len(queried.json()) == len(plain.json()) == 3


@pytest.mark.asyncio
async def test_list_rejects_negative_position(async_client: AsyncClient):
    r = await async_client.get("/invitations/", params={"position": -1})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_message_preview(async_client: AsyncClient, ann):
    created = await _create(async_client, {**ann, "salutation": "FORMAL_FEMALE"})

    r = await async_client.get(f"/invitations/{created['id']}/message")

    assert r.status_code == 200
    assert r.text == "Dear Ms Lee"


@pytest.mark.asyncio
async def test_message_with_missing_template_returns_500(async_client: AsyncClient, ann):
    created = await _create(async_client, {**ann, "contact": "nobody"})
    r = await async_client.get(f"/invitations/{created['id']}/message")
    assert r.status_code == 500


@pytest.mark.asyncio
async def test_send_then_register_flow(async_client: AsyncClient, ann, mock_transport):
    created = await _create(async_client, ann)

    early = await async_client.post(f"/invitations/{created['id']}/register", json={"comment": "hi"})
    assert early.status_code == 422

    sent = await async_client.post(f"/invitations/{created['id']}/send")
    assert sent.status_code == 200
    assert sent.json()["invitationState"] == "SENT"
    mock_transport.send.assert_awaited_once_with("ann@x.com", "info@example.org", "Invitation", "Hi Ann")

    registered = await async_client.post(f"/invitations/{created['id']}/register", json={"comment": "confirmed"})
    assert registered.status_code == 200
    assert registered.json()["invitationState"] == "REGISTERED"
    assert registered.json()["comment"] == "confirmed"

    excused = await async_client.post(f"/invitations/{created['id']}/deregister")
    assert excused.status_code == 200
    assert excused.json()["invitationState"] == "EXCUSED"
    assert excused.json()["comment"] is None


@pytest.mark.asyncio
async def test_send_failure_returns_503(async_client: AsyncClient, ann, mock_transport):
    created = await _create(async_client, ann)
    mock_transport.send.side_effect = OSError("relay denied")

    r = await async_client.post(f"/invitations/{created['id']}/send")

    assert r.status_code == 503
    assert (await async_client.get(f"/invitations/{created['id']}")).json()["invitationState"] == "INITIAL"


@pytest.mark.asyncio
async def test_send_all(async_client: AsyncClient, ann, mock_transport):
    for n in range(3):
        await _create(async_client, {**ann, "email": f"g{n}@x.com"})

    r = await async_client.post("/invitations/send")

    assert r.status_code == 200
    assert r.json() == {"sent": 3}
    assert mock_transport.send.await_count == 3


@pytest.mark.asyncio
async def test_cancel_without_running_batch(async_client: AsyncClient):
    r = await async_client.post("/invitations/send/cancel")
    assert r.status_code == 200
    assert r.json() == {"cancelled": False}
