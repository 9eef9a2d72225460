import pytest

from foreverr.services.moderation_service import decide_action, moderation_service


@pytest.mark.parametrize(
    "flagged, categories, expected",
    [
        (False, {}, "allow"),
        (True, {"harassment": True}, "flag"),
        (True, {"hate/threatening": True}, "block"),
        (True, {"self-harm/intent": True, "harassment": True}, "block"),
        (False, {"sexual/minors": False}, "allow"),
    ],
)
def test_decide_action(flagged, categories, expected):
    assert decide_action(flagged, categories) == expected


@pytest.fixture
def moderation_result(monkeypatch):
    def _set(result):
        async def fake_request(content):
            return result
        monkeypatch.setattr(moderation_service, "_request_moderation", fake_request)
    return _set


async def test_moderation_endpoint(client, alice, moderation_result):
    moderation_result({"flagged": True, "categories": {"harassment": True, "violence": False}})
    response = await client.post(
        "/api/moderation", json={"content": "you are awful", "content_type": "comment"}, headers=alice[1]
    )
    assert response.status_code == 200
    assert response.json() == {
        "flagged": True,
        "categories": {"harassment": True, "violence": False},
        "action": "flag",
        "content_type": "comment",
    }


async def test_moderation_requires_auth(client):
    response = await client.post("/api/moderation", json={"content": "hello"})
    assert response.status_code == 401


async def test_blank_content_rejected(client, alice, moderation_result):
    moderation_result({"flagged": False, "categories": {}})
    empty = await client.post("/api/moderation", json={"content": ""}, headers=alice[1])
    assert empty.status_code == 422
    blank = await client.post("/api/moderation", json={"content": "   "}, headers=alice[1])
    assert blank.status_code == 400
