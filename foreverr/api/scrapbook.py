# foreverr/api/scrapbook.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas.scrapbook_schemas import ScrapbookPageCreate, ScrapbookPageResponse, ScrapbookPageUpdate
from foreverr.services.scrapbook_service import scrapbook_service

router = APIRouter(tags=["scrapbook"])


@router.get("/memorials/{memorial_id}/scrapbook", response_model=List[ScrapbookPageResponse])
async def list_pages(
    memorial_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await scrapbook_service.list_pages(session, memorial_id, current_user.id)


@router.post("/memorials/{memorial_id}/scrapbook", response_model=ScrapbookPageResponse, status_code=201)
async def create_page(
    memorial_id: str,
    request: ScrapbookPageCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await scrapbook_service.create_page(session, memorial_id, current_user.id, request)


@router.patch("/scrapbook/{page_id}", response_model=ScrapbookPageResponse)
async def update_page(
    page_id: str,
    request: ScrapbookPageUpdate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await scrapbook_service.update_page(session, page_id, current_user.id, request)
