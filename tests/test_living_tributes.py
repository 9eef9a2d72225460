from foreverr.config import settings
from foreverr.services.living_tribute_service import split_name
from foreverr.services.moderation_service import moderation_service


def test_split_name():
    assert split_name("Maria Luisa Ortega") == ("Maria", "Luisa Ortega")
    assert split_name("Cher") == ("Cher", "")


async def create_living_tribute(client, headers, **overrides):
    body = {"honoree_name": "Grace Hopper", "title": "Thank you, Grandma", "description": "A life of curiosity"}
    body.update(overrides)
    response = await client.post("/api/living-tributes", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_browse(client, alice, bob):
    _, headers = alice
    tribute = await create_living_tribute(client, headers)
    await create_living_tribute(client, headers, honoree_name="Alan Turing", title="Codebreaker")
    await create_living_tribute(client, headers, honoree_name="Secret", title="Hidden", privacy="private")

    assert tribute["status"] == "active"
    assert tribute["message_count"] == 0

    browse = await client.get("/api/living-tributes", headers=bob[1])
    assert {t["honoree_name"] for t in browse.json()["data"]} == {"Grace Hopper", "Alan Turing"}

    search = await client.get("/api/living-tributes", params={"search": "code"}, headers=bob[1])
    assert [t["honoree_name"] for t in search.json()["data"]] == ["Alan Turing"]

    mine = await client.get("/api/living-tributes/mine", headers=headers)
    assert len(mine.json()) == 3

    balance = await client.get("/api/points/balance", headers=headers)
    assert balance.json()["total_earned"] == 75


async def test_honoring_me(client, alice, bob):
    bob_id, bob_headers = bob
    await client.get("/api/profiles/me", headers=bob_headers)
    await create_living_tribute(client, alice[1], honoree_name="Bob Stone", honoree_user_id=bob_id)

    honoring = await client.get("/api/living-tributes/honoring-me", headers=bob_headers)
    assert [t["honoree_name"] for t in honoring.json()] == ["Bob Stone"]


async def test_only_creator_updates(client, alice, bob):
    tribute = await create_living_tribute(client, alice[1])

    denied = await client.patch(f"/api/living-tributes/{tribute['id']}", json={"title": "Mine now"}, headers=bob[1])
    assert denied.status_code == 403

    updated = await client.patch(f"/api/living-tributes/{tribute['id']}", json={"occasion": "Birthday"}, headers=alice[1])
    assert updated.json()["occasion"] == "Birthday"


async def test_messages_notify_creator(client, alice, bob):
    _, headers = alice
    tribute = await create_living_tribute(client, headers)

    posted = await client.post(
        f"/api/living-tributes/{tribute['id']}/messages",
        json={"content": "You inspired me to study math"},
        headers=bob[1],
    )
    assert posted.status_code == 201

    detail = await client.get(f"/api/living-tributes/{tribute['id']}", headers=headers)
    assert detail.json()["message_count"] == 1

    messages = await client.get(f"/api/living-tributes/{tribute['id']}/messages", headers=headers)
    assert [m["content"] for m in messages.json()["data"]] == ["You inspired me to study math"]

    notes = await client.get("/api/notifications", headers=headers)
    assert [n["type"] for n in notes.json()["data"]] == ["living_tribute_message"]


async def test_convert_to_memorial(client, alice, bob):
    user_id, headers = alice
    tribute = await create_living_tribute(client, headers, honoree_name="Maria Luisa Ortega", honoree_photo_url="https://img/1.jpg")

    denied = await client.post(f"/api/living-tributes/{tribute['id']}/convert", headers=bob[1])
    assert denied.status_code == 403

    converted = await client.post(f"/api/living-tributes/{tribute['id']}/convert", headers=headers)
    assert converted.status_code == 201
    memorial = converted.json()["memorial"]
    assert memorial["first_name"] == "Maria"
    assert memorial["last_name"] == "Luisa Ortega"
    assert memorial["profile_photo_url"] == "https://img/1.jpg"
    assert memorial["obituary"] == "A life of curiosity"
    assert converted.json()["tribute"]["status"] == "converted_to_memorial"
    assert converted.json()["tribute"]["memorial_id"] == memorial["id"]

    hosts = await client.get(f"/api/memorials/{memorial['id']}/hosts", headers=headers)
    assert [(h["user_id"], h["role"]) for h in hosts.json()] == [(user_id, "owner")]

    again = await client.post(f"/api/living-tributes/{tribute['id']}/convert", headers=headers)
    assert again.status_code == 409


async def test_converted_tribute_cannot_be_reopened(client, alice):
    _, headers = alice
    tribute = await create_living_tribute(client, headers)
    converted = await client.post(f"/api/living-tributes/{tribute['id']}/convert", headers=headers)
    assert converted.status_code == 201

    reopen = await client.patch(f"/api/living-tributes/{tribute['id']}", json={"status": "active"}, headers=headers)
    assert reopen.status_code == 409

    # other fields stay editable
    retitled = await client.patch(f"/api/living-tributes/{tribute['id']}", json={"title": "Forever loved"}, headers=headers)
    assert retitled.status_code == 200
    assert retitled.json()["status"] == "converted_to_memorial"

    again = await client.post(f"/api/living-tributes/{tribute['id']}/convert", headers=headers)
    assert again.status_code == 409

    hosted = await client.get("/api/memorials/hosted", headers=headers)
    assert [m["id"] for m in hosted.json()] == [converted.json()["memorial"]["id"]]


async def test_unknown_honoree_rejected(client, alice):
    response = await client.post(
        "/api/living-tributes",
        json={"honoree_name": "Nobody", "title": "Ghost", "honoree_user_id": "no-such-user"},
        headers=alice[1],
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown honoree_user_id: no-such-user"}


async def test_message_moderation_flags_and_blocks(client, alice, bob, monkeypatch):
    tribute = await create_living_tribute(client, alice[1])
    monkeypatch.setattr(settings, "auto_moderation", True)

    async def fake_request(content):
        if "graphic" in content:
            return {"flagged": True, "categories": {"violence/graphic": True}}
        if "rude" in content:
            return {"flagged": True, "categories": {"harassment": True}}
        return {"flagged": False, "categories": {}}

    monkeypatch.setattr(moderation_service, "_request_moderation", fake_request)
    url = f"/api/living-tributes/{tribute['id']}/messages"

    blocked = await client.post(url, json={"content": "something graphic"}, headers=bob[1])
    assert blocked.status_code == 400

    flagged = await client.post(url, json={"content": "something rude"}, headers=bob[1])
    assert flagged.status_code == 201
    assert flagged.json()["is_flagged"] is True

    fine = await client.post(url, json={"content": "happy birthday"}, headers=bob[1])
    assert fine.json()["is_flagged"] is False

    messages = await client.get(url, headers=alice[1])
    assert [(m["content"], m["is_flagged"]) for m in messages.json()["data"]] == [
        ("happy birthday", False),
        ("something rude", True),
    ]
