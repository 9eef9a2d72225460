"""
SQLAlchemy Base and async engine / session management
"""

from typing import AsyncGenerator
from datetime import datetime, timezone
import uuid

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from foreverr.config import settings
from foreverr.utils.logger import logger

Base = declarative_base()


def utcnow() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True, "pool_recycle": 3600}


engine = create_async_engine(
    settings.sqlalchemy_url,
    echo=settings.debug,
    **_engine_options(settings.sqlalchemy_url)
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session dependency"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

async def init_db():
    """Create tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(" Database tables created")

async def close_db():
    await engine.dispose()
    logger.info(" Database connections closed")
