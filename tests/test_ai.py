import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from foreverr.chains.writing_chain import writing_chain
from foreverr.services.media_service import (
    audio_duration,
    media_service,
    mock_voice_duration,
    round_half_up,
    video_duration,
)


@pytest.fixture
def fake_llm(monkeypatch):
    def _install(kind, text):
        monkeypatch.setitem(writing_chain.llms, kind, FakeListChatModel(responses=[text]))
    return _install


def test_video_duration():
    # 5s per photo, 1s transition overlap, 3s intro, 4s outro
    assert video_duration(1) == 12
    assert video_duration(3) == 3 * 5 - 2 + 7


def test_mock_voice_duration():
    assert mock_voice_duration("short text") == 5
    assert mock_voice_duration(" ".join(["word"] * 50)) == 20


def test_durations_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    # 5120 bytes at 2048 bytes per second is 2.5s
    assert audio_duration(5120) == 3
    assert audio_duration(4096) == 2
    # 15 words at 2.5 words per second
    assert mock_voice_duration(" ".join(["word"] * 15)) == 6


async def test_obituary_written_to_memorial(client, alice, create_memorial, fake_llm):
    user_id, headers = alice
    memorial = await create_memorial(headers)
    fake_llm("obituary", "Rose Miller, 92, passed peacefully at home.")

    response = await client.post(
        "/api/ai/obituary", json={"memorial_id": memorial["id"], "style": "warm"}, headers=headers
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["text"] == "Rose Miller, 92, passed peacefully at home."
    generation = body["generation"]
    assert generation["type"] == "obituary"
    assert generation["provider"] == "openai"
    assert generation["style"] == "warm"
    assert generation["requested_by"] == user_id
    assert generation["cost_cents"] == 0

    detail = await client.get(f"/api/memorials/{memorial['id']}", headers=headers)
    assert detail.json()["obituary"] == body["text"]
    assert detail.json()["obituary_is_ai_generated"] is True


async def test_obituary_is_host_only(client, alice, bob, create_memorial, fake_llm):
    memorial = await create_memorial(alice[1])
    fake_llm("obituary", "unused")
    response = await client.post(
        "/api/ai/obituary", json={"memorial_id": memorial["id"], "style": "formal"}, headers=bob[1]
    )
    assert response.status_code == 403


async def test_obituary_rejects_unknown_style(client, alice, create_memorial):
    memorial = await create_memorial(alice[1])
    response = await client.post(
        "/api/ai/obituary", json={"memorial_id": memorial["id"], "style": "gothic"}, headers=alice[1]
    )
    assert response.status_code == 422


async def test_biography_written_to_memorial(client, alice, create_memorial, fake_llm):
    _, headers = alice
    memorial = await create_memorial(headers)
    fake_llm("biography", "Rose was born in 1931 in a small town.")

    response = await client.post(
        "/api/ai/biography", json={"memorial_id": memorial["id"], "style": "chronological"}, headers=headers
    )
    assert response.status_code == 200
    detail = await client.get(f"/api/memorials/{memorial['id']}", headers=headers)
    assert detail.json()["biography"] == "Rose was born in 1931 in a small town."
    assert detail.json()["biography_is_ai_generated"] is True


async def test_tribute_suggestion_not_saved_to_memorial(client, alice, bob, create_memorial, fake_llm):
    memorial = await create_memorial(alice[1])
    fake_llm("tribute", "I will always remember Rose's laugh.")

    response = await client.post(
        "/api/ai/tribute",
        json={"memorial_id": memorial["id"], "memories": "Her laugh"},
        headers=bob[1],
    )
    assert response.status_code == 200
    assert response.json()["generation"]["prompt_data"]["memories"] == "Her laugh"

    wall = await client.get(f"/api/memorials/{memorial['id']}/tributes", headers=bob[1])
    assert wall.json()["data"] == []


async def test_ai_on_missing_memorial(client, alice):
    response = await client.post("/api/ai/tribute", json={"memorial_id": "missing"}, headers=alice[1])
    assert response.status_code == 404


async def test_photo_restore_without_provider_returns_mock(client, alice, create_memorial):
    memorial = await create_memorial(alice[1])
    response = await client.post(
        "/api/ai/photo-restore",
        json={"memorial_id": memorial["id"], "photo_url": "https://img/old.jpg", "restore_type": "colorize"},
        headers=alice[1],
    )
    assert response.status_code == 200
    body = response.json()
    assert body["before_url"] == "https://img/old.jpg"
    assert body["restore_type"] == "colorize"
    assert f"/photo-restore/{memorial['id']}/colorize_" in body["restored_url"]

    generations = await client.get(f"/api/memorials/{memorial['id']}/ai-generations", headers=alice[1])
    [generation] = generations.json()["data"]
    assert generation["id"] == body["generation_id"]
    assert generation["type"] == "photo_colorize"
    assert generation["provider"] == "mock"
    assert generation["cost_cents"] == 0


async def test_photo_restore_with_provider_saves_image(client, alice, create_memorial, monkeypatch):
    memorial = await create_memorial(alice[1])
    monkeypatch.setattr(media_service, "huggingface_token", "hf-test")

    async def fake_download(url, error_message):
        return b"original"

    async def fake_infer(model, image, restore_type):
        assert model == "microsoft/bringing-old-photos-back-to-life"
        return b"restored-bytes"

    monkeypatch.setattr(media_service, "_download", fake_download)
    monkeypatch.setattr(media_service, "_huggingface_infer", fake_infer)

    response = await client.post(
        "/api/ai/photo-restore",
        json={"memorial_id": memorial["id"], "photo_url": "https://img/old.jpg", "restore_type": "restore"},
        headers=alice[1],
    )
    assert response.status_code == 200
    assert "/static/photo-restore/" in response.json()["restored_url"]

    generations = await client.get(
        f"/api/memorials/{memorial['id']}/ai-generations", params={"type": "photo_restore"}, headers=alice[1]
    )
    [generation] = generations.json()["data"]
    assert generation["provider"] == "huggingface"
    assert generation["cost_cents"] == 5


async def test_memorial_video(client, alice, create_memorial):
    memorial = await create_memorial(alice[1])
    photos = [f"https://img/{i}.jpg" for i in range(4)]
    response = await client.post(
        "/api/ai/memorial-video", json={"memorial_id": memorial["id"], "photo_urls": photos}, headers=alice[1]
    )
    assert response.status_code == 200
    body = response.json()
    assert body["duration_seconds"] == 4 * 5 - 3 + 7
    assert body["thumbnail_url"] == photos[0]
    assert body["title"] == "In Loving Memory of Rose Miller"
    assert body["photo_count"] == 4
    assert body["video_url"].endswith(".mp4")


async def test_memorial_video_photo_limits(client, alice, create_memorial):
    memorial = await create_memorial(alice[1])
    empty = await client.post(
        "/api/ai/memorial-video", json={"memorial_id": memorial["id"], "photo_urls": []}, headers=alice[1]
    )
    assert empty.status_code == 422
    too_many = await client.post(
        "/api/ai/memorial-video",
        json={"memorial_id": memorial["id"], "photo_urls": ["https://img/x.jpg"] * 51},
        headers=alice[1],
    )
    assert too_many.status_code == 422


async def test_voice_mock(client, alice, create_memorial):
    memorial = await create_memorial(alice[1])
    text = " ".join(["hello"] * 25)
    response = await client.post(
        "/api/ai/voice", json={"memorial_id": memorial["id"], "text": text}, headers=alice[1]
    )
    assert response.status_code == 200
    assert response.json()["duration_seconds"] == 10
    assert response.json()["audio_url"].endswith(".mp3")


async def test_voice_with_provider_clones_sample(client, alice, create_memorial, monkeypatch):
    memorial = await create_memorial(alice[1])
    monkeypatch.setattr(media_service, "elevenlabs_api_key", "xi-test")
    calls = {}

    async def fake_download(url, error_message):
        return b"sample"

    async def fake_clone(voice_name, memorial_id, sample):
        calls["voice_name"] = voice_name
        return "cloned-voice"

    async def fake_synthesize(voice_id, text):
        calls["voice_id"] = voice_id
        return b"\x00" * 8192

    monkeypatch.setattr(media_service, "_download", fake_download)
    monkeypatch.setattr(media_service, "_clone_voice", fake_clone)
    monkeypatch.setattr(media_service, "_synthesize", fake_synthesize)

    text = "Goodnight, sweetheart"
    response = await client.post(
        "/api/ai/voice",
        json={"memorial_id": memorial["id"], "text": text, "voice_sample_url": "https://audio/sample.mp3"},
        headers=alice[1],
    )
    assert response.status_code == 200
    assert response.json()["duration_seconds"] == 4
    assert calls == {"voice_name": "Rose Miller", "voice_id": "cloned-voice"}

    generations = await client.get(f"/api/memorials/{memorial['id']}/ai-generations", headers=alice[1])
    [generation] = generations.json()["data"]
    assert generation["provider"] == "elevenlabs"
    assert generation["tokens_used"] == len(text)
    assert generation["cost_cents"] == 1


class FakeResponse:
    def __init__(self, status, body=b""):
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def text(self):
        return self.body.decode()

    async def read(self):
        return self.body


def fake_client_session(status, body=b""):
    requests = []

    class FakeClientSession:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        def post(self, url, **kwargs):
            requests.append(url)
            return FakeResponse(status, body)

    return FakeClientSession, requests


async def test_photo_restore_model_loading(client, alice, create_memorial, monkeypatch):
    memorial = await create_memorial(alice[1])
    monkeypatch.setattr(media_service, "huggingface_token", "hf-test")

    async def fake_download(url, error_message):
        return b"original"

    session_class, requests = fake_client_session(503, b"loading")
    monkeypatch.setattr(media_service, "_download", fake_download)
    monkeypatch.setattr("foreverr.services.media_service.aiohttp.ClientSession", session_class)

    response = await client.post(
        "/api/ai/photo-restore",
        json={"memorial_id": memorial["id"], "photo_url": "https://img/old.jpg", "restore_type": "colorize"},
        headers=alice[1],
    )
    assert response.status_code == 502
    assert response.json() == {"error": "The AI model is currently loading. Please try again in 30-60 seconds."}
    assert requests == ["https://api-inference.huggingface.co/models/baldodge/DeOldify"]


async def test_photo_restore_provider_error(client, alice, create_memorial, monkeypatch):
    memorial = await create_memorial(alice[1])
    monkeypatch.setattr(media_service, "huggingface_token", "hf-test")

    async def fake_download(url, error_message):
        return b"original"

    session_class, _ = fake_client_session(500, b"boom")
    monkeypatch.setattr(media_service, "_download", fake_download)
    monkeypatch.setattr("foreverr.services.media_service.aiohttp.ClientSession", session_class)

    response = await client.post(
        "/api/ai/photo-restore",
        json={"memorial_id": memorial["id"], "photo_url": "https://img/old.jpg", "restore_type": "restore"},
        headers=alice[1],
    )
    assert response.status_code == 502
    assert response.json() == {"error": "Photo restore failed: boom"}


async def test_voice_with_provider_uses_default_voice(client, alice, create_memorial, monkeypatch):
    memorial = await create_memorial(alice[1])
    monkeypatch.setattr(media_service, "elevenlabs_api_key", "xi-test")
    monkeypatch.setattr(media_service, "default_voice_id", "default-voice")
    calls = {}

    async def no_clone(voice_name, memorial_id, sample):
        raise AssertionError("no sample, nothing to clone")

    async def fake_synthesize(voice_id, text):
        calls["voice_id"] = voice_id
        return b"\x00" * 5120

    monkeypatch.setattr(media_service, "_clone_voice", no_clone)
    monkeypatch.setattr(media_service, "_synthesize", fake_synthesize)

    response = await client.post(
        "/api/ai/voice", json={"memorial_id": memorial["id"], "text": "I love you all"}, headers=alice[1]
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["duration_seconds"] == 3
    assert "/static/voice/" in body["audio_url"]
    assert calls == {"voice_id": "default-voice"}
