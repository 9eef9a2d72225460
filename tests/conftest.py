import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

_tmp_dir = tempfile.mkdtemp(prefix="foreverr-tests-")

# settings are read at import time
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/foreverr.db"
os.environ["MEDIA_DIR"] = os.path.join(_tmp_dir, "media")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["AUTO_MODERATION"] = "false"
os.environ.pop("HUGGINGFACE_TOKEN", None)
os.environ.pop("ELEVENLABS_API_KEY", None)

from httpx import ASGITransport, AsyncClient  # noqa: E402

from foreverr.main import app  # noqa: E402
from foreverr.models import AsyncSessionLocal, Base  # noqa: E402
from foreverr.models.base import engine  # noqa: E402

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


def make_token(user_id: str, email: str = None, expires_in: int = 3600, **metadata) -> str:
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "email": email,
        "user_metadata": metadata,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def session(db):
    async with AsyncSessionLocal() as s:
        yield s


@pytest.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def user_factory():
    """Returns (user_id, headers) for a fresh user"""
    def _make(username: str = None, display_name: str = None):
        user_id = str(uuid.uuid4())
        metadata = {}
        if username:
            metadata["username"] = username
        if display_name:
            metadata["display_name"] = display_name
        token = make_token(user_id, email=f"{username or user_id[:8]}@example.com", **metadata)
        return user_id, {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def alice(user_factory):
    return user_factory("alice", "Alice Walker")


@pytest.fixture
def bob(user_factory):
    return user_factory("bob", "Bob Stone")


@pytest.fixture
def carol(user_factory):
    return user_factory("carol", "Carol Reyes")


@pytest.fixture
def create_memorial(client):
    async def _create(headers, **overrides):
        body = {"first_name": "Rose", "last_name": "Miller", "date_of_birth": "1931-04-02"}
        body.update(overrides)
        response = await client.post("/api/memorials", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
