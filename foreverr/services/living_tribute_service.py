"""
Living tributes: pages honoring someone still living, which can later be
turned into a memorial
"""

from typing import List, Optional, Tuple

from sqlalchemy import or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import LivingTribute, LivingTributeMessage, Memorial, MemorialHost
from foreverr.models.base import utcnow
from foreverr.schemas.living_tribute_schemas import (
    LivingTributeCreate,
    LivingTributeMessageCreate,
    LivingTributeUpdate
)
from foreverr.services.memorial_service import make_slug
from foreverr.services.moderation_service import moderation_service
from foreverr.services.notification_service import notification_service
from foreverr.services.points_service import points_service
from foreverr.services.profile_service import profile_service
from foreverr.utils.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from foreverr.utils.logger import logger


def split_name(full_name: str) -> Tuple[str, str]:
    """First word is the first name, the rest is the last name"""
    parts = full_name.split()
    if not parts:
        return full_name.strip(), ""
    return parts[0], " ".join(parts[1:])


class LivingTributeService:

    async def browse(self, session: AsyncSession, search: Optional[str], offset: int, limit: int) -> List[LivingTribute]:
        query = select(LivingTribute).where(
            LivingTribute.status == "active",
            LivingTribute.privacy == "public"
        )
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(or_(
                LivingTribute.title.ilike(pattern),
                LivingTribute.honoree_name.ilike(pattern)
            ))
        result = await session.execute(
            query.order_by(LivingTribute.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def list_mine(self, session: AsyncSession, user_id: str) -> List[LivingTribute]:
        result = await session.execute(
            select(LivingTribute)
            .where(LivingTribute.created_by == user_id)
            .order_by(LivingTribute.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_honoring(self, session: AsyncSession, user_id: str) -> List[LivingTribute]:
        result = await session.execute(
            select(LivingTribute)
            .where(LivingTribute.honoree_user_id == user_id)
            .order_by(LivingTribute.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_viewable(self, session: AsyncSession, tribute_id: str, user_id: str) -> LivingTribute:
        tribute = await session.get(LivingTribute, tribute_id)
        if not tribute:
            raise NotFoundError("Living tribute not found")
        if tribute.privacy == "private" and user_id not in (tribute.created_by, tribute.honoree_user_id):
            raise NotFoundError("Living tribute not found")
        return tribute

    async def _get_owned(self, session: AsyncSession, tribute_id: str, user_id: str) -> LivingTribute:
        tribute = await self.get_viewable(session, tribute_id, user_id)
        if tribute.created_by != user_id:
            raise PermissionDeniedError("Only the creator can change this living tribute")
        return tribute

    async def create(self, session: AsyncSession, user_id: str, data: LivingTributeCreate) -> LivingTribute:
        if data.honoree_user_id:
            await profile_service.require_profiles(session, [data.honoree_user_id], "honoree_user_id")

        tribute = LivingTribute(created_by=user_id, **data.model_dump())
        session.add(tribute)
        await session.flush()

        await points_service.award(session, user_id, "living_tribute_created", reference_id=tribute.id)
        await session.commit()

        logger.info(f" Living tribute created: {tribute.id} for {tribute.honoree_name}")
        return tribute

    async def update(
        self,
        session: AsyncSession,
        tribute_id: str,
        user_id: str,
        data: LivingTributeUpdate
    ) -> LivingTribute:
        tribute = await self._get_owned(session, tribute_id, user_id)
        if data.status is not None and tribute.memorial_id is not None:
            raise ConflictError("A converted living tribute cannot change status")
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(tribute, field, value)
        await session.commit()
        return tribute

    async def list_messages(
        self,
        session: AsyncSession,
        tribute_id: str,
        user_id: str,
        offset: int,
        limit: int
    ) -> List[LivingTributeMessage]:
        await self.get_viewable(session, tribute_id, user_id)
        result = await session.execute(
            select(LivingTributeMessage)
            .where(LivingTributeMessage.tribute_id == tribute_id)
            .order_by(LivingTributeMessage.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def post_message(
        self,
        session: AsyncSession,
        tribute_id: str,
        user_id: str,
        data: LivingTributeMessageCreate
    ) -> LivingTributeMessage:
        tribute = await self.get_viewable(session, tribute_id, user_id)
        is_flagged = await moderation_service.screen_user_content(data.content, "message")

        message = LivingTributeMessage(
            tribute_id=tribute_id,
            author_id=user_id,
            content=data.content,
            media_url=data.media_url,
            is_flagged=is_flagged
        )
        session.add(message)
        await session.flush()

        await session.execute(
            update(LivingTribute)
            .where(LivingTribute.id == tribute_id)
            .values(message_count=LivingTribute.message_count + 1)
        )
        await points_service.award(session, user_id, "living_tribute_message", reference_id=message.id)
        if tribute.created_by != user_id:
            notification_service.notify(
                session,
                tribute.created_by,
                type="living_tribute_message",
                title="New message",
                body=f"Someone left a message on \"{tribute.title}\"",
                data={"living_tribute_id": tribute_id, "message_id": message.id}
            )
        await session.commit()

        logger.info(f" Living tribute message: {message.id} on {tribute_id}")
        return message

    async def convert_to_memorial(self, session: AsyncSession, tribute_id: str, user_id: str):
        """Create a memorial from the living tribute. Returns (memorial, tribute)."""
        tribute = await self._get_owned(session, tribute_id, user_id)
        if tribute.memorial_id is not None or tribute.status == "converted_to_memorial":
            raise ConflictError("Living tribute has already been converted to a memorial")

        first_name, last_name = split_name(tribute.honoree_name)
        memorial = Memorial(
            created_by=user_id,
            first_name=first_name,
            last_name=last_name,
            profile_photo_url=tribute.honoree_photo_url,
            cover_photo_url=tribute.cover_photo_url,
            obituary=tribute.description,
            privacy=tribute.privacy,
            slug=make_slug(first_name, last_name)
        )
        session.add(memorial)
        await session.flush()

        session.add(MemorialHost(
            memorial_id=memorial.id,
            user_id=user_id,
            role="owner",
            relationship="family",
            accepted_at=utcnow()
        ))
        tribute.status = "converted_to_memorial"
        tribute.memorial_id = memorial.id
        await points_service.award(session, user_id, "memorial_created", reference_id=memorial.id)
        await session.commit()

        logger.info(f" Living tribute {tribute_id} converted to memorial {memorial.id}")
        return memorial, tribute


living_tribute_service = LivingTributeService()
