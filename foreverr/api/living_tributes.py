# foreverr/api/living_tributes.py

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import PageParams, get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas import Page, paginate
from foreverr.schemas.living_tribute_schemas import (
    ConvertToMemorialResponse,
    LivingTributeCreate,
    LivingTributeMessageCreate,
    LivingTributeMessageResponse,
    LivingTributeResponse,
    LivingTributeUpdate
)
from foreverr.schemas.memorial_schemas import MemorialResponse
from foreverr.services.living_tribute_service import living_tribute_service

router = APIRouter(prefix="/living-tributes", tags=["living-tributes"])


@router.get("", response_model=Page[LivingTributeResponse])
async def browse_living_tributes(
    search: Optional[str] = None,
    page: PageParams = Depends(),
    _: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    tributes = await living_tribute_service.browse(session, search, page.offset, page.limit)
    return paginate(tributes, page.offset, page.limit)


@router.post("", response_model=LivingTributeResponse, status_code=201)
async def create_living_tribute(
    request: LivingTributeCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.create(session, current_user.id, request)


@router.get("/mine", response_model=List[LivingTributeResponse])
async def my_living_tributes(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.list_mine(session, current_user.id)


@router.get("/honoring-me", response_model=List[LivingTributeResponse])
async def living_tributes_honoring_me(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.list_honoring(session, current_user.id)


@router.get("/{tribute_id}", response_model=LivingTributeResponse)
async def get_living_tribute(
    tribute_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.get_viewable(session, tribute_id, current_user.id)


@router.patch("/{tribute_id}", response_model=LivingTributeResponse)
async def update_living_tribute(
    tribute_id: str,
    request: LivingTributeUpdate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.update(session, tribute_id, current_user.id, request)


@router.get("/{tribute_id}/messages", response_model=Page[LivingTributeMessageResponse])
async def list_messages(
    tribute_id: str,
    page: PageParams = Depends(),
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    messages = await living_tribute_service.list_messages(
        session, tribute_id, current_user.id, page.offset, page.limit
    )
    return paginate(messages, page.offset, page.limit)


@router.post("/{tribute_id}/messages", response_model=LivingTributeMessageResponse, status_code=201)
async def post_message(
    tribute_id: str,
    request: LivingTributeMessageCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await living_tribute_service.post_message(session, tribute_id, current_user.id, request)


@router.post("/{tribute_id}/convert", response_model=ConvertToMemorialResponse, status_code=201)
async def convert_to_memorial(
    tribute_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    memorial, tribute = await living_tribute_service.convert_to_memorial(session, tribute_id, current_user.id)
    return ConvertToMemorialResponse(
        memorial=MemorialResponse.model_validate(memorial),
        tribute=LivingTributeResponse.model_validate(tribute)
    )
