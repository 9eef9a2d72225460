"""
Memory vault items and time capsules for a memorial
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import TimeCapsule, VaultItem
from foreverr.models.base import utcnow
from foreverr.schemas.vault_schemas import TimeCapsuleCreate, TimeCapsuleResponse, VaultItemCreate
from foreverr.services.badge_service import badge_service
from foreverr.services.memorial_service import memorial_service
from foreverr.services.notification_service import notification_service
from foreverr.services.points_service import points_service
from foreverr.services.profile_service import profile_service
from foreverr.utils.exceptions import InvalidRequestError, NotFoundError, PermissionDeniedError
from foreverr.utils.logger import logger


def capsule_view(capsule: TimeCapsule, user_id: str) -> TimeCapsuleResponse:
    """Locked capsules keep their content from everyone but the creator"""
    view = TimeCapsuleResponse.model_validate(capsule)
    if not capsule.is_unlocked and capsule.created_by != user_id:
        view = view.model_copy(update={"content": None, "media_url": None})
    return view


class VaultService:

    async def list_items(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        item_type: Optional[str],
        offset: int,
        limit: int
    ) -> List[VaultItem]:
        await memorial_service.get_viewable(session, memorial_id, user_id)
        query = select(VaultItem).where(VaultItem.memorial_id == memorial_id)

        if not await memorial_service.get_host(session, memorial_id, user_id):
            query = query.where(or_(VaultItem.is_private.is_(False), VaultItem.uploaded_by == user_id))
        if item_type:
            query = query.where(VaultItem.item_type == item_type)

        result = await session.execute(
            query.order_by(VaultItem.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def add_item(self, session: AsyncSession, memorial_id: str, user_id: str, data: VaultItemCreate) -> VaultItem:
        await memorial_service.get_viewable(session, memorial_id, user_id)

        fields = data.model_dump(exclude={"metadata"})
        item = VaultItem(memorial_id=memorial_id, uploaded_by=user_id, item_metadata=data.metadata, **fields)
        session.add(item)
        await session.flush()

        await memorial_service.touch(session, memorial_id)
        await badge_service.record_activity(session, user_id, "vault_item_added", reference_id=item.id)
        await points_service.award(session, user_id, "vault_item_added", reference_id=item.id)
        await session.commit()

        logger.info(f" Vault item added: {item.id} ({item.item_type}) on {memorial_id}")
        return item

    async def delete_item(self, session: AsyncSession, item_id: str, user_id: str):
        item = await session.get(VaultItem, item_id)
        if not item:
            raise NotFoundError("Vault item not found")
        if item.uploaded_by != user_id and not await memorial_service.get_host(session, item.memorial_id, user_id):
            raise PermissionDeniedError("Only the uploader or a memorial host can delete this item")

        await session.execute(delete(VaultItem).where(VaultItem.id == item_id))
        await session.commit()
        logger.info(f" Vault item deleted: {item_id}")

    async def list_capsules(self, session: AsyncSession, memorial_id: str, user_id: str) -> List[TimeCapsuleResponse]:
        await memorial_service.get_viewable(session, memorial_id, user_id)
        result = await session.execute(
            select(TimeCapsule)
            .where(TimeCapsule.memorial_id == memorial_id)
            .order_by(TimeCapsule.unlock_date.asc())
        )
        return [capsule_view(capsule, user_id) for capsule in result.scalars().all()]

    async def get_capsule(self, session: AsyncSession, capsule_id: str, user_id: str) -> TimeCapsuleResponse:
        capsule = await session.get(TimeCapsule, capsule_id)
        if not capsule:
            raise NotFoundError("Time capsule not found")
        await memorial_service.get_viewable(session, capsule.memorial_id, user_id)
        return capsule_view(capsule, user_id)

    async def create_capsule(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        data: TimeCapsuleCreate
    ) -> TimeCapsule:
        await memorial_service.get_viewable(session, memorial_id, user_id)
        if data.unlock_date <= utcnow().date():
            raise InvalidRequestError("unlock_date must be in the future")
        await profile_service.require_profiles(session, data.recipient_ids, "recipient_ids")

        capsule = TimeCapsule(memorial_id=memorial_id, created_by=user_id, **data.model_dump())
        session.add(capsule)
        await session.flush()

        await badge_service.record_activity(session, user_id, "capsule_created", reference_id=capsule.id)
        await points_service.award(session, user_id, "capsule_created", reference_id=capsule.id)
        await session.commit()

        logger.info(f" Time capsule sealed: {capsule.id} until {capsule.unlock_date}")
        return capsule

    async def unlock_due_capsules(self, session: AsyncSession, today: Optional[date] = None) -> int:
        today = today or utcnow().date()
        result = await session.execute(
            select(TimeCapsule).where(
                TimeCapsule.is_unlocked.is_(False),
                TimeCapsule.unlock_date <= today
            )
        )
        capsules = list(result.scalars().all())
        known = await profile_service.existing_ids(
            session, [r for c in capsules if c.notify_on_unlock for r in (c.recipient_ids or [])]
        )

        for capsule in capsules:
            capsule.is_unlocked = True
            capsule.unlocked_at = utcnow()
            if not capsule.notify_on_unlock:
                continue
            for recipient_id in capsule.recipient_ids or []:
                if recipient_id not in known:
                    logger.warning(f" Capsule {capsule.id}: skipping unknown recipient {recipient_id}")
                    continue
                notification_service.notify(
                    session,
                    recipient_id,
                    type="capsule_unlocked",
                    title="A time capsule has opened",
                    body=capsule.title,
                    data={"capsule_id": capsule.id, "memorial_id": capsule.memorial_id}
                )

        await session.commit()
        logger.info(f" Unlocked {len(capsules)} time capsules")
        return len(capsules)


vault_service = VaultService()
