"""
AI features for a memorial

Each call authenticates upstream, loads the memorial, calls the provider,
logs an AIGeneration row and returns the result.
"""

import math
import uuid
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.chains.writing_chain import writing_chain
from foreverr.models import MemorialHost
from foreverr.schemas.ai_schemas import (
    BiographyRequest,
    MemorialVideoRequest,
    ObituaryRequest,
    PhotoRestoreRequest,
    TributeSuggestionRequest,
    VoiceRequest
)
from foreverr.services.generation_service import generation_service, text_cost_cents
from foreverr.services.media_service import media_service, video_duration
from foreverr.services.memorial_service import memorial_service
from foreverr.utils.logger import logger

PHOTO_RESTORE_COST_CENTS = 5
VOICE_COST_PER_CHAR = 0.03


class AIService:
    def __init__(self):
        self.writing_chain = writing_chain
        self.media_service = media_service

    async def generate_obituary(self, session: AsyncSession, user_id: str, data: ObituaryRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)
        host = await memorial_service.require_host(session, memorial.id, user_id)

        result = await self.writing_chain.write_obituary(memorial, data.style, host)
        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type="obituary",
            provider="openai",
            model=self.writing_chain.model_name,
            prompt_data={"style": data.style, "prompt_length": result["prompt_length"]},
            output_text=result["text"],
            tokens_used=result["tokens_used"],
            cost_cents=text_cost_cents(result["tokens_used"]),
            style=data.style
        )
        memorial.obituary = result["text"]
        memorial.obituary_is_ai_generated = True
        await session.commit()

        logger.info(f" Obituary written for {memorial.id} ({data.style})")
        return {"generation": generation, "text": result["text"]}

    async def generate_biography(self, session: AsyncSession, user_id: str, data: BiographyRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)
        await memorial_service.require_host(session, memorial.id, user_id)

        hosts = await session.execute(select(MemorialHost).where(MemorialHost.memorial_id == memorial.id))
        result = await self.writing_chain.write_biography(memorial, data.style, list(hosts.scalars().all()))
        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type="biography",
            provider="openai",
            model=self.writing_chain.model_name,
            prompt_data={"style": data.style, "prompt_length": result["prompt_length"]},
            output_text=result["text"],
            tokens_used=result["tokens_used"],
            cost_cents=text_cost_cents(result["tokens_used"]),
            style=data.style
        )
        memorial.biography = result["text"]
        memorial.biography_is_ai_generated = True
        await session.commit()

        logger.info(f" Biography written for {memorial.id} ({data.style})")
        return {"generation": generation, "text": result["text"]}

    async def suggest_tribute(self, session: AsyncSession, user_id: str, data: TributeSuggestionRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)

        result = await self.writing_chain.write_tribute(memorial, data.attributes, data.impact, data.memories)
        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type="tribute",
            provider="openai",
            model=self.writing_chain.model_name,
            prompt_data={"attributes": data.attributes, "impact": data.impact, "memories": data.memories},
            output_text=result["text"],
            tokens_used=result["tokens_used"],
            cost_cents=text_cost_cents(result["tokens_used"])
        )
        await session.commit()
        return {"generation": generation, "text": result["text"]}

    async def restore_photo(self, session: AsyncSession, user_id: str, data: PhotoRestoreRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)

        restored = await self.media_service.restore_photo(memorial.id, data.photo_url, data.restore_type)
        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type=f"photo_{data.restore_type}",
            provider=restored["provider"],
            model=restored["model"],
            prompt_data={"photo_url": data.photo_url, "restore_type": data.restore_type},
            output_text=restored["url"],
            cost_cents=PHOTO_RESTORE_COST_CENTS if restored["provider"] != "mock" else 0
        )
        await session.commit()

        logger.info(f" Photo {data.restore_type} for {memorial.id} via {restored['provider']}")
        return {
            "restored_url": restored["url"],
            "before_url": data.photo_url,
            "restore_type": data.restore_type,
            "generation_id": generation.id
        }

    async def create_memorial_video(self, session: AsyncSession, user_id: str, data: MemorialVideoRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)

        photo_count = len(data.photo_urls)
        title = data.title or f"In Loving Memory of {memorial.full_name}"
        video_url = await self.media_service.render_video(memorial.id, str(uuid.uuid4()))

        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type="memorial_video",
            provider="mock",
            model="mock",
            prompt_data={
                "photo_urls": data.photo_urls,
                "music_url": data.music_url,
                "title": title,
                "photo_count": photo_count
            },
            output_text=video_url
        )
        await session.commit()

        return {
            "video_url": video_url,
            "duration_seconds": video_duration(photo_count),
            "thumbnail_url": data.photo_urls[0],
            "title": title,
            "photo_count": photo_count,
            "generation_id": generation.id
        }

    async def generate_voice(self, session: AsyncSession, user_id: str, data: VoiceRequest) -> Dict:
        memorial = await memorial_service.get_viewable(session, data.memorial_id, user_id)

        voice = await self.media_service.generate_voice(
            memorial.id, memorial.full_name, data.text, data.voice_sample_url
        )
        with_provider = voice["provider"] != "mock"
        generation = await generation_service.record(
            session,
            memorial_id=memorial.id,
            requested_by=user_id,
            type="voice",
            provider=voice["provider"],
            model=voice["model"],
            prompt_data={"text": data.text, "voice_sample_url": data.voice_sample_url},
            output_text=voice["url"],
            tokens_used=len(data.text),
            cost_cents=math.ceil(len(data.text) * VOICE_COST_PER_CHAR) if with_provider else 0
        )
        await session.commit()

        logger.info(f" Voice generated for {memorial.id} via {voice['provider']}")
        return {
            "audio_url": voice["url"],
            "duration_seconds": voice["duration_seconds"],
            "generation_id": generation.id
        }

    async def list_generations(self, session: AsyncSession, memorial_id: str, user_id: str, type, offset, limit):
        await memorial_service.get_viewable(session, memorial_id, user_id)
        return await generation_service.list_for_memorial(session, memorial_id, type, offset, limit)


ai_service = AIService()
