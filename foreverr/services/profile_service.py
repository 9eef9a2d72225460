import re
from typing import Dict, Iterable, Set

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import Profile
from foreverr.schemas.profile_schemas import ProfileUpdate
from foreverr.utils.exceptions import InvalidRequestError, NotFoundError
from foreverr.utils.logger import logger


class ProfileService:

    async def ensure_profile(self, session: AsyncSession, claims: Dict) -> Profile:
        """Return the caller's profile, creating it on first sign-in"""
        user_id = claims["sub"]
        profile = await session.get(Profile, user_id)
        if profile:
            return profile

        metadata = claims.get("user_metadata") or {}
        email = claims.get("email")
        base = metadata.get("username") or (email.split("@")[0] if email else "member")
        username = await self._unique_username(session, base)

        profile = Profile(
            id=user_id,
            username=username,
            display_name=metadata.get("display_name") or metadata.get("full_name") or username,
            email=email,
            avatar_url=metadata.get("avatar_url"),
        )
        session.add(profile)
        await session.commit()
        logger.info(f" Profile created: {user_id} ({username})")
        return profile

    async def get_profile(self, session: AsyncSession, profile_id: str) -> Profile:
        profile = await session.get(Profile, profile_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    async def existing_ids(self, session: AsyncSession, profile_ids: Iterable[str]) -> Set[str]:
        profile_ids = set(profile_ids)
        if not profile_ids:
            return set()
        result = await session.execute(select(Profile.id).where(Profile.id.in_(profile_ids)))
        return set(result.scalars().all())

    async def require_profiles(self, session: AsyncSession, profile_ids: Iterable[str], field: str):
        """Reject references to users that have no profile"""
        profile_ids = set(profile_ids)
        missing = profile_ids - await self.existing_ids(session, profile_ids)
        if missing:
            raise InvalidRequestError(f"Unknown {field}: {', '.join(sorted(missing))}")

    async def update_profile(self, session: AsyncSession, profile: Profile, data: ProfileUpdate) -> Profile:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)
        await session.commit()
        return profile

    async def _unique_username(self, session: AsyncSession, base: str) -> str:
        base = re.sub(r"[^a-z0-9_]", "", base.lower())[:40] or "member"
        candidate = base
        suffix = 1
        while await self._username_taken(session, candidate):
            suffix += 1
            candidate = f"{base}{suffix}"
        return candidate

    async def _username_taken(self, session: AsyncSession, username: str) -> bool:
        result = await session.execute(select(Profile.id).where(Profile.username == username))
        return result.first() is not None


profile_service = ProfileService()
