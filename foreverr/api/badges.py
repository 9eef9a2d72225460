# foreverr/api/badges.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas.badge_schemas import (
    BadgeCheckResponse,
    BadgeDefinition,
    BadgeDisplayRequest,
    UserBadgeResponse
)
from foreverr.services.badge_service import BADGE_DEFINITIONS, badge_service

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("/definitions", response_model=List[BadgeDefinition])
async def get_definitions():
    return BADGE_DEFINITIONS


@router.get("/mine", response_model=List[UserBadgeResponse])
async def my_badges(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await badge_service.get_user_badges(session, current_user.id)


@router.post("/check", response_model=BadgeCheckResponse)
async def check_badges(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Award new badges and upgrade tiers from recorded activity"""
    return await badge_service.check_and_award(session, current_user.id)


@router.patch("/{badge_id}/display", response_model=UserBadgeResponse)
async def set_badge_display(
    badge_id: str,
    request: BadgeDisplayRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await badge_service.set_displayed(session, current_user.id, badge_id, request.is_displayed)
