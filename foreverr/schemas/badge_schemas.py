from typing import Dict, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class BadgeDefinition(BaseModel):
    badge_type: str
    name: str
    description: str
    category: str
    activity_type: str
    tier_thresholds: Dict[str, int]


class UserBadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    badge_type: str
    badge_tier: str
    progress: int
    is_displayed: bool
    earned_at: datetime


class BadgeCheckResponse(BaseModel):
    awarded: List[UserBadgeResponse]
    upgraded: List[UserBadgeResponse]


class BadgeDisplayRequest(BaseModel):
    is_displayed: bool
