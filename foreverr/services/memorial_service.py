"""
Memorial pages, their hosts and followers
"""

import re
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import delete, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import Follower, Memorial, MemorialHost, Profile
from foreverr.models.base import utcnow
from foreverr.schemas.memorial_schemas import HostCreate, MemorialCreate, MemorialUpdate
from foreverr.services.badge_service import badge_service
from foreverr.services.points_service import points_service
from foreverr.utils.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from foreverr.utils.logger import logger

MANAGER_ROLES = ("owner", "admin")


def make_slug(first_name: str, last_name: str) -> str:
    name = f"{first_name} {last_name}".strip().lower()
    base = re.sub(r"[^a-z0-9]+", "-", name).strip("-") or "memorial"
    return f"{base[:120]}-{uuid.uuid4().hex[:6]}"


class MemorialService:

    async def create_memorial(self, session: AsyncSession, user_id: str, data: MemorialCreate) -> Memorial:
        fields = data.model_dump(exclude={"relationship", "relationship_detail"})
        memorial = Memorial(
            created_by=user_id,
            slug=make_slug(data.first_name, data.last_name),
            **fields
        )
        session.add(memorial)
        await session.flush()

        session.add(MemorialHost(
            memorial_id=memorial.id,
            user_id=user_id,
            role="owner",
            relationship=data.relationship,
            relationship_detail=data.relationship_detail,
            accepted_at=utcnow()
        ))
        await points_service.award(session, user_id, "memorial_created", reference_id=memorial.id)
        await session.commit()

        logger.info(f" Memorial created: {memorial.id} ({memorial.full_name}) by {user_id}")
        return memorial

    async def list_public(self, session: AsyncSession, search: Optional[str], offset: int, limit: int) -> List[Memorial]:
        query = select(Memorial).where(Memorial.status == "active", Memorial.privacy == "public")
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(or_(
                Memorial.first_name.ilike(pattern),
                Memorial.last_name.ilike(pattern)
            ))
        result = await session.execute(
            query.order_by(Memorial.last_interaction_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def list_top(self, session: AsyncSession, limit: int) -> List[Memorial]:
        result = await session.execute(
            select(Memorial)
            .where(Memorial.status == "active", Memorial.privacy == "public")
            .order_by(Memorial.follower_count.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_followed(self, session: AsyncSession, user_id: str) -> List[Memorial]:
        result = await session.execute(
            select(Memorial)
            .join(Follower, Follower.memorial_id == Memorial.id)
            .where(Follower.user_id == user_id)
            .order_by(Memorial.last_interaction_at.desc())
        )
        return list(result.scalars().all())

    async def list_hosted(self, session: AsyncSession, user_id: str) -> List[Memorial]:
        result = await session.execute(
            select(Memorial)
            .join(MemorialHost, MemorialHost.memorial_id == Memorial.id)
            .where(MemorialHost.user_id == user_id)
            .order_by(Memorial.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_host(self, session: AsyncSession, memorial_id: str, user_id: str) -> Optional[MemorialHost]:
        result = await session.execute(
            select(MemorialHost).where(
                MemorialHost.memorial_id == memorial_id,
                MemorialHost.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_viewable(self, session: AsyncSession, memorial_id: str, user_id: str) -> Memorial:
        """Private memorials are only visible to their hosts"""
        memorial = await session.get(Memorial, memorial_id)
        if not memorial:
            raise NotFoundError("Memorial not found")
        if memorial.privacy == "private" and not await self.get_host(session, memorial_id, user_id):
            raise NotFoundError("Memorial not found")
        return memorial

    async def require_host(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        roles: Optional[Sequence[str]] = None
    ) -> MemorialHost:
        host = await self.get_host(session, memorial_id, user_id)
        if not host or (roles and host.role not in roles):
            raise PermissionDeniedError("Only memorial hosts can do this")
        return host

    async def update_memorial(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        data: MemorialUpdate
    ) -> Memorial:
        memorial = await self.get_viewable(session, memorial_id, user_id)
        await self.require_host(session, memorial_id, user_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(memorial, field, value)
        await session.commit()

        logger.info(f" Memorial updated: {memorial_id} by {user_id}")
        return memorial

    async def toggle_follow(self, session: AsyncSession, memorial_id: str, user_id: str):
        """Returns (following, memorial) with the refreshed follower count"""
        memorial = await self.get_viewable(session, memorial_id, user_id)

        result = await session.execute(
            select(Follower).where(Follower.memorial_id == memorial_id, Follower.user_id == user_id)
        )
        follow = result.scalar_one_or_none()

        if follow:
            await session.execute(delete(Follower).where(Follower.id == follow.id))
            await session.execute(
                update(Memorial)
                .where(Memorial.id == memorial_id, Memorial.follower_count > 0)
                .values(follower_count=Memorial.follower_count - 1)
            )
            following = False
        else:
            session.add(Follower(memorial_id=memorial_id, user_id=user_id))
            await session.execute(
                update(Memorial)
                .where(Memorial.id == memorial_id)
                .values(follower_count=Memorial.follower_count + 1)
            )
            await badge_service.record_activity(session, user_id, "user_followed", reference_id=memorial_id)
            await points_service.award(session, user_id, "user_followed", reference_id=memorial_id)
            following = True

        await session.commit()
        await session.refresh(memorial)
        logger.info(f" Follow {'added' if following else 'removed'}: {user_id} -> {memorial_id}")
        return following, memorial

    async def is_following(self, session: AsyncSession, memorial_id: str, user_id: str) -> bool:
        result = await session.execute(
            select(Follower.id).where(Follower.memorial_id == memorial_id, Follower.user_id == user_id)
        )
        return result.first() is not None

    async def list_hosts(self, session: AsyncSession, memorial_id: str, user_id: str) -> List[MemorialHost]:
        await self.get_viewable(session, memorial_id, user_id)
        result = await session.execute(
            select(MemorialHost).where(MemorialHost.memorial_id == memorial_id).order_by(MemorialHost.created_at)
        )
        return list(result.scalars().all())

    async def add_host(self, session: AsyncSession, memorial_id: str, user_id: str, data: HostCreate) -> MemorialHost:
        await self.get_viewable(session, memorial_id, user_id)
        await self.require_host(session, memorial_id, user_id, roles=MANAGER_ROLES)

        if not await session.get(Profile, data.user_id):
            raise NotFoundError("User not found")
        if await self.get_host(session, memorial_id, data.user_id):
            raise ConflictError("User is already a host of this memorial")

        host = MemorialHost(
            memorial_id=memorial_id,
            user_id=data.user_id,
            role=data.role,
            relationship=data.relationship,
            relationship_detail=data.relationship_detail,
            invited_by=user_id
        )
        session.add(host)
        await session.commit()

        logger.info(f" Host added: {data.user_id} ({data.role}) on {memorial_id}")
        return host

    async def touch(self, session: AsyncSession, memorial_id: str, **counters: int):
        """Bump last_interaction_at and apply counter deltas. Caller commits."""
        values = {"last_interaction_at": utcnow()}
        for column, delta in counters.items():
            values[column] = getattr(Memorial, column) + delta
        await session.execute(update(Memorial).where(Memorial.id == memorial_id).values(**values))


memorial_service = MemorialService()
