# foreverr/api/tributes.py

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.tribute_schemas import (
    CommentCreate,
    CommentResponse,
    PinRequest,
    ReactionToggleRequest,
    ReactionToggleResponse,
    TributeCreate,
    TributeResponse
)
from foreverr.services.tribute_service import tribute_service

router = APIRouter(tags=["tributes"])


@router.get("/memorials/{memorial_id}/tributes", response_model=Page[TributeResponse])
async def list_tributes(
    memorial_id: str,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Tribute wall, pinned first"""
    tributes = await tribute_service.list_for_memorial(
        session, memorial_id, current_user.id, page.offset, page.limit
    )
    return paginate(tributes, page.offset, page.limit)


@router.post("/memorials/{memorial_id}/tributes", response_model=TributeResponse, status_code=201)
async def create_tribute(
    memorial_id: str,
    request: TributeCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await tribute_service.create_tribute(session, memorial_id, current_user.id, request)


@router.get("/tributes/feed", response_model=Page[TributeResponse])
async def home_feed(
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    tributes = await tribute_service.home_feed(session, current_user.id, page.offset, page.limit)
    return paginate(tributes, page.offset, page.limit)


@router.get("/tributes/{tribute_id}/comments", response_model=Page[CommentResponse])
async def list_comments(
    tribute_id: str,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    comments = await tribute_service.list_comments(session, tribute_id, current_user.id, page.offset, page.limit)
    return paginate(comments, page.offset, page.limit)


@router.post("/tributes/{tribute_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    tribute_id: str,
    request: CommentCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await tribute_service.add_comment(session, tribute_id, current_user.id, request)


@router.patch("/tributes/{tribute_id}/pin", response_model=TributeResponse)
async def pin_tribute(
    tribute_id: str,
    request: PinRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await tribute_service.set_pinned(session, tribute_id, current_user.id, request.is_pinned)


@router.delete("/tributes/{tribute_id}", status_code=204)
async def delete_tribute(
    tribute_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    await tribute_service.delete_tribute(session, tribute_id, current_user.id)
    return Response(status_code=204)


@router.post("/reactions/toggle", response_model=ReactionToggleResponse)
async def toggle_reaction(
    request: ReactionToggleRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    action = await tribute_service.toggle_reaction(session, current_user.id, request)
    return ReactionToggleResponse(action=action)
