from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class PointBalance(BaseModel):
    user_id: str
    total_earned: int
    total_spent: int
    current_balance: int
    level: int
    level_name: str
    next_level_at: Optional[int] = None


class PointEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    points: int
    action_type: str
    reference_id: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime


class LegacyLevel(BaseModel):
    id: int
    level_name: str
    min_points: int
    perks: List[str] = []


class LeaderboardEntry(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    total_earned: int
    level: int
    level_name: str


class RedeemRequest(BaseModel):
    points_spent: int = Field(gt=0)
    redemption_type: str = Field(min_length=1)
    reference_id: Optional[str] = None


class RedeemResponse(BaseModel):
    redemption_id: str
    points_spent: int
    balance: PointBalance
