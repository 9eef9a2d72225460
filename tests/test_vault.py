from datetime import timedelta

from sqlalchemy import text

from foreverr.models import TimeCapsule
from foreverr.models.base import utcnow
from foreverr.services.vault_service import vault_service


def future(days=30):
    return (utcnow().date() + timedelta(days=days)).isoformat()


async def add_item(client, memorial_id, headers, **overrides):
    body = {"item_type": "photo", "title": "Wedding photo", "media_url": "https://img/w.jpg", "metadata": {"year": 1955}}
    body.update(overrides)
    return await client.post(f"/api/memorials/{memorial_id}/vault", json=body, headers=headers)


async def test_add_and_list_items(client, alice, bob, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)

    created = await add_item(client, memorial["id"], bob[1])
    assert created.status_code == 201
    assert created.json()["metadata"] == {"year": 1955}

    await add_item(client, memorial["id"], headers, item_type="document", title="Recipe card")

    everything = await client.get(f"/api/memorials/{memorial['id']}/vault", headers=headers)
    assert [i["title"] for i in everything.json()["data"]] == ["Recipe card", "Wedding photo"]

    photos = await client.get(f"/api/memorials/{memorial['id']}/vault", params={"item_type": "photo"}, headers=headers)
    assert [i["title"] for i in photos.json()["data"]] == ["Wedding photo"]


async def test_private_items_visible_to_uploader_and_hosts(client, alice, bob, carol, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    await add_item(client, memorial["id"], bob[1], title="Private note", is_private=True)

    for viewer, expected in ((bob[1], 1), (headers, 1), (carol[1], 0)):
        listing = await client.get(f"/api/memorials/{memorial['id']}/vault", headers=viewer)
        assert len(listing.json()["data"]) == expected


async def test_delete_item(client, alice, bob, carol, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    item = (await add_item(client, memorial["id"], bob[1])).json()

    assert (await client.delete(f"/api/vault/{item['id']}", headers=carol[1])).status_code == 403
    assert (await client.delete(f"/api/vault/{item['id']}", headers=bob[1])).status_code == 204
    assert (await client.delete(f"/api/vault/{item['id']}", headers=bob[1])).status_code == 404


async def test_capsule_content_withheld_until_unlock(client, session, alice, bob, create_memorial):
    _, headers = alice
    bob_id, bob_headers = bob
    await client.get("/api/profiles/me", headers=bob_headers)
    memorial = await create_memorial(headers)

    created = await client.post(
        f"/api/memorials/{memorial['id']}/capsules",
        json={"title": "Open in 2040", "content": "Our secret recipe", "unlock_date": future(), "recipient_ids": [bob_id]},
        headers=headers,
    )
    assert created.status_code == 201
    capsule = created.json()
    assert capsule["content"] == "Our secret recipe"

    locked = await client.get(f"/api/capsules/{capsule['id']}", headers=bob_headers)
    assert locked.json()["content"] is None
    assert locked.json()["is_unlocked"] is False

    listing = await client.get(f"/api/memorials/{memorial['id']}/capsules", headers=bob_headers)
    assert listing.json()[0]["content"] is None

    row = await session.get(TimeCapsule, capsule["id"])
    row.unlock_date = utcnow().date()
    await session.commit()
    assert await vault_service.unlock_due_capsules(session) == 1

    unlocked = await client.get(f"/api/capsules/{capsule['id']}", headers=bob_headers)
    assert unlocked.json()["is_unlocked"] is True
    assert unlocked.json()["content"] == "Our secret recipe"

    notes = await client.get("/api/notifications", headers=bob_headers)
    assert [n["type"] for n in notes.json()["data"]] == ["capsule_unlocked"]


async def test_capsule_unlock_date_must_be_future(client, alice, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    response = await client.post(
        f"/api/memorials/{memorial['id']}/capsules",
        json={"title": "Too soon", "unlock_date": utcnow().date().isoformat()},
        headers=headers,
    )
    assert response.status_code == 400


async def test_capsules_ordered_by_unlock_date(client, alice, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    for title, days in (("later", 400), ("sooner", 40)):
        await client.post(
            f"/api/memorials/{memorial['id']}/capsules",
            json={"title": title, "unlock_date": future(days)},
            headers=headers,
        )
    listing = await client.get(f"/api/memorials/{memorial['id']}/capsules", headers=headers)
    assert [c["title"] for c in listing.json()] == ["sooner", "later"]


async def test_capsule_rejects_unknown_recipients(client, alice, bob, create_memorial):
    _, headers = alice
    bob_id, bob_headers = bob
    await client.get("/api/profiles/me", headers=bob_headers)
    memorial = await create_memorial(headers)

    response = await client.post(
        f"/api/memorials/{memorial['id']}/capsules",
        json={"title": "Lost", "unlock_date": future(), "recipient_ids": [bob_id, "no-such-user"]},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown recipient_ids: no-such-user"}

    listing = await client.get(f"/api/memorials/{memorial['id']}/capsules", headers=headers)
    assert listing.json() == []


async def test_unlock_skips_recipients_without_profile(client, session, alice, bob, create_memorial):
    alice_id, headers = alice
    bob_id, bob_headers = bob
    await client.get("/api/profiles/me", headers=bob_headers)
    memorial = await create_memorial(headers)

    good = await client.post(
        f"/api/memorials/{memorial['id']}/capsules",
        json={"title": "For Bob", "unlock_date": future(), "recipient_ids": [bob_id]},
        headers=headers,
    )
    assert good.status_code == 201

    # rows written before recipients were checked
    stray = TimeCapsule(
        memorial_id=memorial["id"],
        created_by=alice_id,
        title="For a stranger",
        unlock_date=utcnow().date() + timedelta(days=30),
        recipient_ids=["no-such-user"],
    )
    session.add(stray)
    await session.commit()

    await session.execute(text("PRAGMA foreign_keys=ON"))
    unlocked = await vault_service.unlock_due_capsules(session, today=utcnow().date() + timedelta(days=31))
    assert unlocked == 2

    assert (await session.get(TimeCapsule, good.json()["id"])).is_unlocked is True
    assert (await session.get(TimeCapsule, stray.id)).is_unlocked is True

    notes = await client.get("/api/notifications", headers=bob_headers)
    assert [n["body"] for n in notes.json()["data"]] == ["For Bob"]
