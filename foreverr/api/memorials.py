# foreverr/api/memorials.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.ai_schemas import AIGenerationResponse
from foreverr.schemas.memorial_schemas import (
    FollowResponse,
    HostCreate,
    HostResponse,
    MemorialCreate,
    MemorialResponse,
    MemorialUpdate
)
from foreverr.services.ai_service import ai_service
from foreverr.services.memorial_service import memorial_service

router = APIRouter(prefix="/memorials", tags=["memorials"])


@router.post("", response_model=MemorialResponse, status_code=201)
async def create_memorial(
    request: MemorialCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.create_memorial(session, current_user.id, request)


@router.get("", response_model=Page[MemorialResponse])
async def list_memorials(
    search: Optional[str] = None,
    page: PageParams = Depends(),
    _: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Public, active memorials, most recently active first"""
    memorials = await memorial_service.list_public(session, search, page.offset, page.limit)
    return paginate(memorials, page.offset, page.limit)


@router.get("/top", response_model=List[MemorialResponse])
async def top_memorials(
    limit: int = Query(default=10, ge=1, le=100),
    _: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.list_top(session, limit)


@router.get("/following", response_model=List[MemorialResponse])
async def followed_memorials(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.list_followed(session, current_user.id)


@router.get("/hosted", response_model=List[MemorialResponse])
async def hosted_memorials(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.list_hosted(session, current_user.id)


@router.get("/{memorial_id}", response_model=MemorialResponse)
async def get_memorial(
    memorial_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.get_viewable(session, memorial_id, current_user.id)


@router.patch("/{memorial_id}", response_model=MemorialResponse)
async def update_memorial(
    memorial_id: str,
    request: MemorialUpdate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.update_memorial(session, memorial_id, current_user.id, request)


@router.post("/{memorial_id}/follow", response_model=FollowResponse)
async def toggle_follow(
    memorial_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    following, memorial = await memorial_service.toggle_follow(session, memorial_id, current_user.id)
    return FollowResponse(following=following, follower_count=memorial.follower_count)


@router.get("/{memorial_id}/hosts", response_model=List[HostResponse])
async def list_hosts(
    memorial_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.list_hosts(session, memorial_id, current_user.id)


@router.post("/{memorial_id}/hosts", response_model=HostResponse, status_code=201)
async def add_host(
    memorial_id: str,
    request: HostCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await memorial_service.add_host(session, memorial_id, current_user.id, request)


@router.get("/{memorial_id}/ai-generations", response_model=Page[AIGenerationResponse])
async def list_ai_generations(
    memorial_id: str,
    type: Optional[str] = None,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    generations = await ai_service.list_generations(
        session, memorial_id, current_user.id, type, page.offset, page.limit
    )
    return paginate(generations, page.offset, page.limit)
