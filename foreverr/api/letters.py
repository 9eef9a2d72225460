# foreverr/api/letters.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas.letter_schemas import LegacyLetterCreate, LegacyLetterResponse
from foreverr.services.letter_service import letter_service

router = APIRouter(prefix="/letters", tags=["legacy-letters"])


@router.post("", response_model=LegacyLetterResponse, status_code=201)
async def create_letter(
    request: LegacyLetterCreate,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Schedule a letter for future delivery"""
    return await letter_service.create_letter(session, current_user.id, request)


@router.get("/mine", response_model=List[LegacyLetterResponse])
async def my_letters(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await letter_service.list_mine(session, current_user.id)


@router.get("/received", response_model=List[LegacyLetterResponse])
async def received_letters(
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await letter_service.list_received(session, current_user.id)


@router.get("/{letter_id}", response_model=LegacyLetterResponse)
async def get_letter(
    letter_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await letter_service.get_letter(session, letter_id, current_user.id)


@router.post("/{letter_id}/read", response_model=LegacyLetterResponse)
async def mark_letter_read(
    letter_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    return await letter_service.mark_read(session, letter_id, current_user.id)


@router.delete("/{letter_id}", status_code=204)
async def delete_letter(
    letter_id: str,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    await letter_service.delete_letter(session, letter_id, current_user.id)
    return Response(status_code=204)
