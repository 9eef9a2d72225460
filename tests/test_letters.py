from datetime import timedelta

from foreverr.models import LegacyLetter
from foreverr.models.base import utcnow
from foreverr.services.letter_service import letter_service


def future(days=30):
    return (utcnow().date() + timedelta(days=days)).isoformat()


async def write_letter(client, headers, **overrides):
    body = {
        "recipient_name": "Bob",
        "subject": "For your wedding day",
        "content": "I am so proud of you.",
        "delivery_date": future(),
    }
    body.update(overrides)
    return await client.post("/api/letters", json=body, headers=headers)


async def deliver_now(session, letter_id):
    """Backdate a letter and run delivery"""
    letter = await session.get(LegacyLetter, letter_id)
    letter.delivery_date = utcnow().date() - timedelta(days=1)
    await session.commit()
    return await letter_service.deliver_due_letters(session)


async def test_delivery_date_must_be_in_future(client, alice):
    response = await write_letter(client, alice[1], delivery_date=utcnow().date().isoformat())
    assert response.status_code == 400
    assert response.json() == {"error": "delivery_date must be in the future"}


async def test_email_letter_needs_address(client, alice):
    response = await write_letter(client, alice[1], delivery_type="email")
    assert response.status_code == 400


async def test_my_letters_ordered_by_delivery_date(client, alice):
    _, headers = alice
    await write_letter(client, headers, subject="later", delivery_date=future(90))
    await write_letter(client, headers, subject="sooner", delivery_date=future(10))

    mine = await client.get("/api/letters/mine", headers=headers)
    assert [letter["subject"] for letter in mine.json()] == ["sooner", "later"]

    balance = await client.get("/api/points/balance", headers=headers)
    assert balance.json()["total_earned"] == 30


async def test_recipient_sees_letter_only_after_delivery(client, session, alice, bob):
    bob_id, bob_headers = bob
    await client.get("/api/profiles/me", headers=bob_headers)
    letter = (await write_letter(client, alice[1], recipient_user_id=bob_id)).json()

    hidden = await client.get(f"/api/letters/{letter['id']}", headers=bob_headers)
    assert hidden.status_code == 404
    assert (await client.get("/api/letters/received", headers=bob_headers)).json() == []

    delivered = await deliver_now(session, letter["id"])
    assert delivered == 1

    visible = await client.get(f"/api/letters/{letter['id']}", headers=bob_headers)
    assert visible.status_code == 200
    assert visible.json()["is_delivered"] is True

    received = await client.get("/api/letters/received", headers=bob_headers)
    assert [r["id"] for r in received.json()] == [letter["id"]]

    notes = await client.get("/api/notifications", headers=bob_headers)
    assert [n["type"] for n in notes.json()["data"]] == ["letter_delivered"]

    read = await client.post(f"/api/letters/{letter['id']}/read", headers=bob_headers)
    assert read.json()["is_read"] is True
    assert read.json()["read_at"] is not None


async def test_delete_only_before_delivery(client, session, alice):
    _, headers = alice
    pending = (await write_letter(client, headers)).json()
    deleted = await client.delete(f"/api/letters/{pending['id']}", headers=headers)
    assert deleted.status_code == 204

    letter = (await write_letter(client, headers)).json()
    await deliver_now(session, letter["id"])
    conflict = await client.delete(f"/api/letters/{letter['id']}", headers=headers)
    assert conflict.status_code == 409


async def test_delivery_skips_future_letters(client, session, alice):
    await write_letter(client, alice[1])
    assert await letter_service.deliver_due_letters(session) == 0
    # a run far enough ahead picks it up
    assert await letter_service.deliver_due_letters(session, today=utcnow().date() + timedelta(days=31)) == 1


async def test_unknown_recipient_rejected(client, alice):
    response = await write_letter(client, alice[1], recipient_user_id="no-such-user")
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown recipient_user_id: no-such-user"}
    assert (await client.get("/api/letters/mine", headers=alice[1])).json() == []
