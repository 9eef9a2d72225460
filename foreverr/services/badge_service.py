"""
Activity log and badge awarding

Each badge tracks one activity type. The tier is the highest threshold the
user's activity count reaches; badges are only ever upgraded.
"""

from collections import Counter
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import UserActivity, UserBadge
from foreverr.models.base import utcnow
from foreverr.utils.exceptions import NotFoundError
from foreverr.utils.logger import logger

TIER_ORDER = ["bronze", "silver", "gold", "platinum"]

BADGE_DEFINITIONS: List[Dict] = [
    {
        "badge_type": "first_tribute",
        "name": "First Tribute",
        "description": "Shared a tribute on a memorial",
        "category": "tributes",
        "activity_type": "tribute_posted",
        "tier_thresholds": {"bronze": 1},
    },
    {
        "badge_type": "storyteller",
        "name": "Storyteller",
        "description": "Keeps memories alive through tributes",
        "category": "tributes",
        "activity_type": "tribute_posted",
        "tier_thresholds": {"bronze": 5, "silver": 25, "gold": 100, "platinum": 250},
    },
    {
        "badge_type": "candlelight",
        "name": "Candlelight",
        "description": "Lit candles in remembrance",
        "category": "remembrance",
        "activity_type": "candle_lit",
        "tier_thresholds": {"bronze": 1, "silver": 10, "gold": 50, "platinum": 200},
    },
    {
        "badge_type": "memory_keeper",
        "name": "Memory Keeper",
        "description": "Preserved items in the memory vault",
        "category": "preservation",
        "activity_type": "vault_item_added",
        "tier_thresholds": {"bronze": 1, "silver": 10, "gold": 50, "platinum": 150},
    },
    {
        "badge_type": "time_traveler",
        "name": "Time Traveler",
        "description": "Sealed time capsules for the future",
        "category": "preservation",
        "activity_type": "capsule_created",
        "tier_thresholds": {"bronze": 1, "silver": 5, "gold": 15, "platinum": 40},
    },
    {
        "badge_type": "digital_artist",
        "name": "Digital Artist",
        "description": "Published scrapbook pages",
        "category": "creativity",
        "activity_type": "scrapbook_published",
        "tier_thresholds": {"bronze": 1, "silver": 5, "gold": 20, "platinum": 50},
    },
    {
        "badge_type": "community_builder",
        "name": "Community Builder",
        "description": "Follows memorials in the community",
        "category": "community",
        "activity_type": "user_followed",
        "tier_thresholds": {"bronze": 1, "silver": 10, "gold": 50, "platinum": 100},
    },
]


def tier_rank(tier: Optional[str]) -> int:
    return TIER_ORDER.index(tier) + 1 if tier in TIER_ORDER else 0


def tier_for(count: int, thresholds: Dict[str, int]) -> Optional[str]:
    """Highest tier whose threshold the count reaches"""
    reached = None
    for tier in TIER_ORDER:
        threshold = thresholds.get(tier)
        if threshold is not None and count >= threshold:
            reached = tier
    return reached


class BadgeService:

    async def record_activity(
        self,
        session: AsyncSession,
        user_id: str,
        activity_type: str,
        reference_id: Optional[str] = None
    ) -> UserActivity:
        """Caller commits"""
        activity = UserActivity(user_id=user_id, activity_type=activity_type, reference_id=reference_id)
        session.add(activity)
        return activity

    async def get_user_badges(self, session: AsyncSession, user_id: str) -> List[UserBadge]:
        result = await session.execute(
            select(UserBadge).where(UserBadge.user_id == user_id).order_by(UserBadge.earned_at.desc())
        )
        return list(result.scalars().all())

    async def check_and_award(self, session: AsyncSession, user_id: str) -> Dict[str, List[UserBadge]]:
        result = await session.execute(
            select(UserActivity.activity_type, func.count())
            .where(UserActivity.user_id == user_id)
            .group_by(UserActivity.activity_type)
        )
        counts = Counter({activity_type: count for activity_type, count in result.all()})
        earned = {badge.badge_type: badge for badge in await self.get_user_badges(session, user_id)}

        awarded: List[UserBadge] = []
        upgraded: List[UserBadge] = []

        for definition in BADGE_DEFINITIONS:
            count = counts.get(definition["activity_type"], 0)
            tier = tier_for(count, definition["tier_thresholds"])
            if not tier:
                continue

            existing = earned.get(definition["badge_type"])
            if existing is None:
                badge = UserBadge(
                    user_id=user_id,
                    badge_type=definition["badge_type"],
                    badge_tier=tier,
                    progress=count
                )
                session.add(badge)
                awarded.append(badge)
            elif tier_rank(tier) > tier_rank(existing.badge_tier):
                existing.badge_tier = tier
                existing.progress = count
                existing.earned_at = utcnow()
                upgraded.append(existing)
            else:
                existing.progress = count

        await session.commit()
        if awarded or upgraded:
            logger.info(f" Badges for {user_id}: +{len(awarded)} new, {len(upgraded)} upgraded")
        return {"awarded": awarded, "upgraded": upgraded}

    async def set_displayed(self, session: AsyncSession, user_id: str, badge_id: str, is_displayed: bool) -> UserBadge:
        badge = await session.get(UserBadge, badge_id)
        if not badge or badge.user_id != user_id:
            raise NotFoundError("Badge not found")
        badge.is_displayed = is_displayed
        await session.commit()
        return badge


badge_service = BadgeService()
