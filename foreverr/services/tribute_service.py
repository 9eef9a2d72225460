"""
Tribute wall: tributes, threaded comments and reactions
"""

from typing import List

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import Follower, Memorial, Reaction, Tribute, TributeComment
from foreverr.schemas.tribute_schemas import CommentCreate, ReactionToggleRequest, TributeCreate
from foreverr.services.badge_service import badge_service
from foreverr.services.memorial_service import memorial_service
from foreverr.services.moderation_service import moderation_service
from foreverr.services.notification_service import notification_service
from foreverr.services.points_service import points_service
from foreverr.utils.exceptions import InvalidRequestError, NotFoundError, PermissionDeniedError
from foreverr.utils.logger import logger


class TributeService:

    async def list_for_memorial(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        offset: int,
        limit: int
    ) -> List[Tribute]:
        await memorial_service.get_viewable(session, memorial_id, user_id)
        result = await session.execute(
            select(Tribute)
            .where(Tribute.memorial_id == memorial_id)
            .order_by(Tribute.is_pinned.desc(), Tribute.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def home_feed(self, session: AsyncSession, user_id: str, offset: int, limit: int) -> List[Tribute]:
        """Newest tributes across the memorials the user follows"""
        result = await session.execute(
            select(Tribute)
            .join(Follower, Follower.memorial_id == Tribute.memorial_id)
            .where(Follower.user_id == user_id)
            .order_by(Tribute.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create_tribute(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        data: TributeCreate
    ) -> Tribute:
        memorial = await memorial_service.get_viewable(session, memorial_id, user_id)
        is_flagged = await moderation_service.screen_user_content(data.content, "tribute")

        tribute = Tribute(
            memorial_id=memorial_id,
            author_id=user_id,
            is_flagged=is_flagged,
            **data.model_dump()
        )
        session.add(tribute)
        await session.flush()

        await memorial_service.touch(session, memorial_id, tribute_count=1)
        await badge_service.record_activity(session, user_id, "tribute_posted", reference_id=tribute.id)
        await points_service.award(session, user_id, "tribute_posted", reference_id=tribute.id)
        await self._notify_followers(session, memorial, tribute)
        await session.commit()

        logger.info(f" Tribute posted: {tribute.id} ({tribute.type}) on {memorial_id}")
        return tribute

    async def _notify_followers(self, session: AsyncSession, memorial: Memorial, tribute: Tribute):
        result = await session.execute(
            select(Follower.user_id).where(
                Follower.memorial_id == memorial.id,
                Follower.notify_on_new_tribute.is_(True),
                Follower.user_id != tribute.author_id
            )
        )
        for follower_id in result.scalars().all():
            notification_service.notify(
                session,
                follower_id,
                type="new_tribute",
                title="New tribute",
                body=f"Someone shared a tribute for {memorial.full_name}",
                data={"memorial_id": memorial.id, "tribute_id": tribute.id}
            )

    async def get_tribute(self, session: AsyncSession, tribute_id: str, user_id: str) -> Tribute:
        tribute = await session.get(Tribute, tribute_id)
        if not tribute:
            raise NotFoundError("Tribute not found")
        # hides tributes on private memorials from non-hosts
        await memorial_service.get_viewable(session, tribute.memorial_id, user_id)
        return tribute

    async def list_comments(
        self,
        session: AsyncSession,
        tribute_id: str,
        user_id: str,
        offset: int,
        limit: int
    ) -> List[TributeComment]:
        await self.get_tribute(session, tribute_id, user_id)
        result = await session.execute(
            select(TributeComment)
            .where(TributeComment.tribute_id == tribute_id)
            .order_by(TributeComment.created_at.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def add_comment(
        self,
        session: AsyncSession,
        tribute_id: str,
        user_id: str,
        data: CommentCreate
    ) -> TributeComment:
        tribute = await self.get_tribute(session, tribute_id, user_id)

        if data.parent_comment_id:
            parent = await session.get(TributeComment, data.parent_comment_id)
            if not parent or parent.tribute_id != tribute_id:
                raise InvalidRequestError("Parent comment does not belong to this tribute")

        is_flagged = await moderation_service.screen_user_content(data.content, "comment")
        comment = TributeComment(
            tribute_id=tribute_id,
            author_id=user_id,
            content=data.content,
            parent_comment_id=data.parent_comment_id,
            is_flagged=is_flagged
        )
        session.add(comment)
        await session.flush()

        await session.execute(
            update(Tribute)
            .where(Tribute.id == tribute_id)
            .values(comment_count=Tribute.comment_count + 1)
        )
        await memorial_service.touch(session, tribute.memorial_id)
        await points_service.award(session, user_id, "comment_posted", reference_id=comment.id)
        await session.commit()

        logger.info(f" Comment added: {comment.id} on tribute {tribute_id}")
        return comment

    async def toggle_reaction(self, session: AsyncSession, user_id: str, data: ReactionToggleRequest) -> str:
        """Add the reaction, or remove it when it already exists. Returns the action taken."""
        target_model = Tribute if data.target_type == "tribute" else TributeComment
        target = await session.get(target_model, data.target_id)
        if not target:
            raise NotFoundError(f"{data.target_type.capitalize()} not found")
        tribute_id = target.id if data.target_type == "tribute" else target.tribute_id
        await self.get_tribute(session, tribute_id, user_id)

        result = await session.execute(
            select(Reaction).where(
                Reaction.user_id == user_id,
                Reaction.target_type == data.target_type,
                Reaction.target_id == data.target_id,
                Reaction.reaction_type == data.reaction_type
            )
        )
        existing = result.scalar_one_or_none()

        if existing:
            await session.execute(delete(Reaction).where(Reaction.id == existing.id))
            await session.execute(
                update(target_model)
                .where(target_model.id == data.target_id, target_model.like_count > 0)
                .values(like_count=target_model.like_count - 1)
            )
            action = "removed"
        else:
            session.add(Reaction(
                user_id=user_id,
                target_type=data.target_type,
                target_id=data.target_id,
                reaction_type=data.reaction_type
            ))
            await session.execute(
                update(target_model)
                .where(target_model.id == data.target_id)
                .values(like_count=target_model.like_count + 1)
            )
            if data.reaction_type == "candle":
                await badge_service.record_activity(session, user_id, "candle_lit", reference_id=data.target_id)
            action = "added"

        await session.commit()
        logger.debug(f" Reaction {action}: {user_id} {data.reaction_type} on {data.target_type} {data.target_id}")
        return action

    async def set_pinned(self, session: AsyncSession, tribute_id: str, user_id: str, is_pinned: bool) -> Tribute:
        tribute = await self.get_tribute(session, tribute_id, user_id)
        await memorial_service.require_host(session, tribute.memorial_id, user_id)

        tribute.is_pinned = is_pinned
        await session.commit()
        logger.info(f" Tribute {'pinned' if is_pinned else 'unpinned'}: {tribute_id}")
        return tribute

    async def delete_tribute(self, session: AsyncSession, tribute_id: str, user_id: str):
        tribute = await self.get_tribute(session, tribute_id, user_id)
        if tribute.author_id != user_id and not await memorial_service.get_host(session, tribute.memorial_id, user_id):
            raise PermissionDeniedError("Only the author or a memorial host can delete this tribute")

        comment_ids = select(TributeComment.id).where(TributeComment.tribute_id == tribute_id)
        await session.execute(delete(Reaction).where(
            Reaction.target_type == "comment",
            Reaction.target_id.in_(comment_ids)
        ))
        await session.execute(delete(Reaction).where(
            Reaction.target_type == "tribute",
            Reaction.target_id == tribute_id
        ))
        await session.execute(delete(TributeComment).where(TributeComment.tribute_id == tribute_id))
        await session.execute(delete(Tribute).where(Tribute.id == tribute_id))
        await session.execute(
            update(Memorial)
            .where(Memorial.id == tribute.memorial_id, Memorial.tribute_count > 0)
            .values(tribute_count=Memorial.tribute_count - 1)
        )
        await session.commit()
        logger.info(f" Tribute deleted: {tribute_id} by {user_id}")


tribute_service = TributeService()
