# foreverr/api/moderation.py

from fastapi import APIRouter, Depends, HTTPException

from foreverr.api.deps import get_current_user
from foreverr.models import Profile
from foreverr.schemas.ai_schemas import ModerationRequest, ModerationResponse
from foreverr.services.moderation_service import moderation_service
from foreverr.utils.exceptions import ForeverrError
from foreverr.utils.logger import logger

router = APIRouter(tags=["moderation"])


@router.post("/moderation", response_model=ModerationResponse)
async def moderate_content(
    request: ModerationRequest,
    _: Profile = Depends(get_current_user)
):
    try:
        return await moderation_service.moderate(request.content, request.content_type)
    except ForeverrError:
        raise
    except Exception as e:
        logger.error(f" Moderation failed: {e}")
        raise HTTPException(status_code=500, detail="Moderation failed")
