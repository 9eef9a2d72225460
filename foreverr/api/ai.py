# foreverr/api/ai.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.api.deps import get_current_user
from foreverr.models import Profile, get_async_session
from foreverr.schemas.ai_schemas import (
    BiographyRequest,
    MemorialVideoRequest,
    MemorialVideoResponse,
    ObituaryRequest,
    PhotoRestoreRequest,
    PhotoRestoreResponse,
    TextGenerationResponse,
    TributeSuggestionRequest,
    VoiceRequest,
    VoiceResponse
)
from foreverr.services.ai_service import ai_service
from foreverr.utils.exceptions import ForeverrError
from foreverr.utils.logger import logger

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/obituary", response_model=TextGenerationResponse)
async def generate_obituary(
    request: ObituaryRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Write the memorial's obituary (hosts only)"""
    try:
        return await ai_service.generate_obituary(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Obituary generation failed: {e}")
        raise HTTPException(status_code=500, detail="Obituary generation failed")


@router.post("/biography", response_model=TextGenerationResponse)
async def generate_biography(
    request: BiographyRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Write the memorial's biography (hosts only)"""
    try:
        return await ai_service.generate_biography(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Biography generation failed: {e}")
        raise HTTPException(status_code=500, detail="Biography generation failed")


@router.post("/tribute", response_model=TextGenerationResponse)
async def suggest_tribute(
    request: TributeSuggestionRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    """Draft a first-person tribute; nothing is posted"""
    try:
        return await ai_service.suggest_tribute(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Tribute suggestion failed: {e}")
        raise HTTPException(status_code=500, detail="Tribute suggestion failed")


@router.post("/photo-restore", response_model=PhotoRestoreResponse)
async def restore_photo(
    request: PhotoRestoreRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    try:
        return await ai_service.restore_photo(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Photo restore failed: {e}")
        raise HTTPException(status_code=500, detail="Photo restore failed")


@router.post("/memorial-video", response_model=MemorialVideoResponse)
async def create_memorial_video(
    request: MemorialVideoRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    try:
        return await ai_service.create_memorial_video(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Memorial video failed: {e}")
        raise HTTPException(status_code=500, detail="Memorial video failed")


@router.post("/voice", response_model=VoiceResponse)
async def generate_voice(
    request: VoiceRequest,
    current_user: Profile = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session)
):
    try:
        return await ai_service.generate_voice(session, current_user.id, request)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Voice generation failed: {e}")
        raise HTTPException(status_code=500, detail="Voice generation failed")
