from foreverr.services.badge_service import tier_for, tier_rank
from foreverr.services.points_service import level_for


def test_level_for():
    level, next_at = level_for(0)
    assert (level["level_name"], next_at) == ("Newcomer", 100)
    level, next_at = level_for(300)
    assert (level["level_name"], next_at) == ("Storyteller", 750)
    level, next_at = level_for(5000)
    assert (level["level_name"], next_at) == ("Legacy Builder", None)


def test_tier_for():
    thresholds = {"bronze": 1, "silver": 10, "gold": 50}
    assert tier_for(0, thresholds) is None
    assert tier_for(9, thresholds) == "bronze"
    assert tier_for(50, thresholds) == "gold"
    assert tier_rank("gold") > tier_rank("silver") > tier_rank(None)


async def test_levels_catalogue(client):
    response = await client.get("/api/points/levels")
    assert [level["min_points"] for level in response.json()] == [0, 100, 300, 750, 1500, 3000]


async def test_balance_and_redeem(client, alice, create_memorial):
    _, headers = alice
    await create_memorial(headers)
    await create_memorial(headers)

    balance = (await client.get("/api/points/balance", headers=headers)).json()
    assert balance["current_balance"] == 100
    assert balance["level_name"] == "Remembrancer"
    assert balance["next_level_at"] == 300

    redeemed = await client.post(
        "/api/points/redeem", json={"points_spent": 40, "redemption_type": "profile_frame"}, headers=headers
    )
    assert redeemed.status_code == 200
    assert redeemed.json()["balance"]["current_balance"] == 60
    assert redeemed.json()["balance"]["total_spent"] == 40
    # level follows lifetime earnings, not the balance
    assert redeemed.json()["balance"]["level_name"] == "Remembrancer"

    too_much = await client.post(
        "/api/points/redeem", json={"points_spent": 61, "redemption_type": "profile_frame"}, headers=headers
    )
    assert too_much.status_code == 400

    negative = await client.post(
        "/api/points/redeem", json={"points_spent": 0, "redemption_type": "profile_frame"}, headers=headers
    )
    assert negative.status_code == 422


async def test_history_newest_first(client, alice, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    await client.post(f"/api/memorials/{memorial['id']}/tributes", json={"type": "candle"}, headers=headers)

    history = await client.get("/api/points/history", headers=headers)
    assert [e["action_type"] for e in history.json()["data"]] == ["tribute_posted", "memorial_created"]


async def test_leaderboard(client, alice, bob, create_memorial):
    await create_memorial(alice[1])
    memorial = await create_memorial(alice[1])
    await client.post(f"/api/memorials/{memorial['id']}/tributes", json={"type": "flower"}, headers=bob[1])

    board = await client.get("/api/points/leaderboard", headers=bob[1])
    assert [(e["display_name"], e["total_earned"]) for e in board.json()] == [("Alice Walker", 100), ("Bob Stone", 10)]


async def test_badge_definitions(client):
    response = await client.get("/api/badges/definitions")
    types = [b["badge_type"] for b in response.json()]
    assert "first_tribute" in types
    assert "time_traveler" in types


async def test_badges_awarded_then_upgraded(client, alice, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    url = f"/api/memorials/{memorial['id']}/tributes"

    await client.post(url, json={"type": "candle"}, headers=headers)
    first = (await client.post("/api/badges/check", headers=headers)).json()
    assert [b["badge_type"] for b in first["awarded"]] == ["first_tribute"]
    assert first["upgraded"] == []

    for _ in range(4):
        await client.post(url, json={"type": "candle"}, headers=headers)
    second = (await client.post("/api/badges/check", headers=headers)).json()
    assert [(b["badge_type"], b["badge_tier"]) for b in second["awarded"]] == [("storyteller", "bronze")]

    third = (await client.post("/api/badges/check", headers=headers)).json()
    assert third == {"awarded": [], "upgraded": []}

    mine = (await client.get("/api/badges/mine", headers=headers)).json()
    progress = {b["badge_type"]: b["progress"] for b in mine}
    assert progress == {"first_tribute": 5, "storyteller": 5}


async def test_badge_display_toggle(client, alice, bob, create_memorial):
    _, headers = alice
    memorial = await create_memorial(headers)
    await client.post(f"/api/memorials/{memorial['id']}/tributes", json={"type": "candle"}, headers=headers)
    [badge] = (await client.post("/api/badges/check", headers=headers)).json()["awarded"]

    hidden = await client.patch(f"/api/badges/{badge['id']}/display", json={"is_displayed": False}, headers=headers)
    assert hidden.json()["is_displayed"] is False

    not_mine = await client.patch(f"/api/badges/{badge['id']}/display", json={"is_displayed": True}, headers=bob[1])
    assert not_mine.status_code == 404
