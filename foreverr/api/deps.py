from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foreverr.models import Profile, get_async_session
from foreverr.services.profile_service import profile_service
from foreverr.utils.auth import extract_bearer_token, verify_access_token

MAX_PAGE_SIZE = 100


async def get_current_user(
    authorization: str = Header(default=""),
    session: AsyncSession = Depends(get_async_session),
) -> Profile:
    """Verify the bearer token and return the caller's profile"""
    claims = verify_access_token(extract_bearer_token(authorization))
    return await profile_service.ensure_profile(session, claims)


class PageParams:
    def __init__(
        self,
        offset: int = Query(default=0, ge=0),
        limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    ):
        self.offset = offset
        self.limit = limit
