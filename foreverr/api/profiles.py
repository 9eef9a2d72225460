# foreverr/api/profiles.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas.profile_schemas import ProfileResponse, ProfileUpdate
from foreverr.services.profile_service import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: Profile = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    request: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await profile_service.update_profile(session, current_user, request)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    _: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await profile_service.get_profile(session, profile_id)
