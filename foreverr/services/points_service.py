"""
Legacy points: earned for contributions, spent on redemptions
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import PointEntry, PointRedemption, Profile
from foreverr.utils.exceptions import InvalidRequestError
from foreverr.utils.logger import logger

# points granted per action
POINT_VALUES: Dict[str, int] = {
    "memorial_created": 50,
    "living_tribute_created": 25,
    "tribute_posted": 10,
    "letter_written": 15,
    "capsule_created": 15,
    "scrapbook_published": 10,
    "vault_item_added": 5,
    "living_tribute_message": 5,
    "comment_posted": 2,
    "user_followed": 1,
}

LEGACY_LEVELS: List[Dict] = [
    {"id": 1, "level_name": "Newcomer", "min_points": 0, "perks": []},
    {"id": 2, "level_name": "Remembrancer", "min_points": 100, "perks": ["Profile frame"]},
    {"id": 3, "level_name": "Storyteller", "min_points": 300, "perks": ["Profile frame", "Custom tribute ribbons"]},
    {"id": 4, "level_name": "Keeper", "min_points": 750, "perks": ["Profile frame", "Custom tribute ribbons", "Extra vault space"]},
    {"id": 5, "level_name": "Guardian", "min_points": 1500, "perks": ["Profile frame", "Custom tribute ribbons", "Extra vault space", "Seasonal decorations"]},
    {"id": 6, "level_name": "Legacy Builder", "min_points": 3000, "perks": ["All perks"]},
]

LEADERBOARD_SIZE = 20


def level_for(total_earned: int) -> Tuple[Dict, Optional[int]]:
    """Return the level reached and the points needed for the next one"""
    current = LEGACY_LEVELS[0]
    next_level_at = None
    for level in LEGACY_LEVELS:
        if total_earned >= level["min_points"]:
            current = level
        else:
            next_level_at = level["min_points"]
            break
    return current, next_level_at


class PointsService:

    async def award(
        self,
        session: AsyncSession,
        user_id: str,
        action_type: str,
        reference_id: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[PointEntry]:
        """Add a point entry for an action. Caller commits."""
        points = POINT_VALUES.get(action_type)
        if not points:
            logger.warning(f" No point value for action '{action_type}'")
            return None

        entry = PointEntry(
            user_id=user_id,
            points=points,
            action_type=action_type,
            reference_id=reference_id,
            description=description
        )
        session.add(entry)
        logger.debug(f" +{points} points: {user_id} {action_type}")
        return entry

    async def get_balance(self, session: AsyncSession, user_id: str) -> Dict:
        earned = await session.scalar(
            select(func.coalesce(func.sum(PointEntry.points), 0)).where(PointEntry.user_id == user_id)
        )
        spent = await session.scalar(
            select(func.coalesce(func.sum(PointRedemption.points_spent), 0)).where(PointRedemption.user_id == user_id)
        )
        earned, spent = int(earned or 0), int(spent or 0)
        level, next_level_at = level_for(earned)
        return {
            "user_id": user_id,
            "total_earned": earned,
            "total_spent": spent,
            "current_balance": earned - spent,
            "level": level["id"],
            "level_name": level["level_name"],
            "next_level_at": next_level_at
        }

    async def get_history(self, session: AsyncSession, user_id: str, offset: int, limit: int) -> List[PointEntry]:
        result = await session.execute(
            select(PointEntry)
            .where(PointEntry.user_id == user_id)
            .order_by(PointEntry.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def redeem(
        self,
        session: AsyncSession,
        user_id: str,
        points_spent: int,
        redemption_type: str,
        reference_id: Optional[str] = None
    ) -> Tuple[PointRedemption, Dict]:
        if points_spent <= 0:
            raise InvalidRequestError("points_spent must be positive")

        balance = await self.get_balance(session, user_id)
        if points_spent > balance["current_balance"]:
            raise InvalidRequestError(
                f"Insufficient points: balance is {balance['current_balance']}, requested {points_spent}"
            )

        redemption = PointRedemption(
            user_id=user_id,
            points_spent=points_spent,
            redemption_type=redemption_type,
            reference_id=reference_id
        )
        session.add(redemption)
        await session.commit()
        logger.info(f" Points redeemed: {user_id} -{points_spent} ({redemption_type})")

        return redemption, await self.get_balance(session, user_id)

    async def get_leaderboard(self, session: AsyncSession) -> List[Dict]:
        total = func.sum(PointEntry.points).label("total_earned")
        result = await session.execute(
            select(PointEntry.user_id, total, Profile.display_name, Profile.avatar_url)
            .join(Profile, Profile.id == PointEntry.user_id)
            .group_by(PointEntry.user_id, Profile.display_name, Profile.avatar_url)
            .order_by(total.desc())
            .limit(LEADERBOARD_SIZE)
        )
        board = []
        for user_id, total_earned, display_name, avatar_url in result.all():
            level, _ = level_for(int(total_earned))
            board.append({
                "user_id": user_id,
                "display_name": display_name,
                "avatar_url": avatar_url,
                "total_earned": int(total_earned),
                "level": level["id"],
                "level_name": level["level_name"]
            })
        return board


points_service = PointsService()
