# foreverr/api/points.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.points_schemas import (
    LeaderboardEntry,
    LegacyLevel,
    PointBalance,
    PointEntryResponse,
    RedeemRequest,
    RedeemResponse
)
from foreverr.services.points_service import LEGACY_LEVELS, points_service

router = APIRouter(prefix="/points", tags=["points"])


@router.get("/balance", response_model=PointBalance)
async def get_balance(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await points_service.get_balance(session, current_user.id)


@router.get("/history", response_model=Page[PointEntryResponse])
async def get_history(
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    entries = await points_service.get_history(session, current_user.id, page.offset, page.limit)
    return paginate(entries, page.offset, page.limit)


@router.get("/levels", response_model=List[LegacyLevel])
async def get_levels():
    return LEGACY_LEVELS


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    _: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await points_service.get_leaderboard(session)


@router.post("/redeem", response_model=RedeemResponse)
async def redeem_points(
    request: RedeemRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    redemption, balance = await points_service.redeem(
        session,
        current_user.id,
        request.points_spent,
        request.redemption_type,
        request.reference_id
    )
    return RedeemResponse(redemption_id=redemption.id, points_spent=redemption.points_spent, balance=balance)
