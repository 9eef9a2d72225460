from typing import Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import Notification
from foreverr.utils.exceptions import NotFoundError


class NotificationService:

    def notify(
        self,
        session: AsyncSession,
        user_id: str,
        type: str,
        title: str,
        body: str,
        data: Optional[Dict] = None
    ) -> Notification:
        """Queue a notification on the session. Caller commits."""
        notification = Notification(user_id=user_id, type=type, title=title, body=body, data=data or {})
        session.add(notification)
        return notification

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        unread_only: bool,
        offset: int,
        limit: int
    ) -> List[Notification]:
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.is_read.is_(False))
        result = await session.execute(
            query.order_by(Notification.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def mark_read(self, session: AsyncSession, user_id: str, notification_id: str) -> Notification:
        notification = await session.get(Notification, notification_id)
        if not notification or notification.user_id != user_id:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        await session.commit()
        return notification

    async def mark_all_read(self, session: AsyncSession, user_id: str) -> int:
        result = await session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        await session.commit()
        return result.rowcount


notification_service = NotificationService()
