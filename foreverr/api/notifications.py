# foreverr/api/notifications.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.notification_schemas import MarkAllReadResponse, NotificationResponse
from foreverr.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    notifications = await notification_service.list_for_user(
        session, current_user.id, unread_only, page.offset, page.limit
    )
    return paginate(notifications, page.offset, page.limit)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    updated = await notification_service.mark_all_read(session, current_user.id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await notification_service.mark_read(session, current_user.id, notification_id)
