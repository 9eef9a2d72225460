# foreverr/schemas/memorial_schemas.py

from typing import Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


# request schemas
class MemorialCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    place_of_birth: Optional[str] = None
    place_of_death: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    obituary: Optional[str] = None
    biography: Optional[str] = None
    privacy: Literal["public", "private"] = "public"
    purge_after_days: int = Field(default=365, ge=1)
    # creator's relationship to the deceased
    relationship: str = Field(default="family", min_length=1)
    relationship_detail: Optional[str] = None


class MemorialUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    place_of_birth: Optional[str] = None
    place_of_death: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    obituary: Optional[str] = None
    biography: Optional[str] = None
    privacy: Optional[Literal["public", "private"]] = None
    status: Optional[Literal["active", "archived"]] = None
    purge_after_days: Optional[int] = Field(default=None, ge=1)


class HostCreate(BaseModel):
    user_id: str
    role: Literal["admin", "contributor"] = "contributor"
    relationship: str = Field(min_length=1)
    relationship_detail: Optional[str] = None


# response schemas
class MemorialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    nickname: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    place_of_birth: Optional[str] = None
    place_of_death: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    obituary: Optional[str] = None
    biography: Optional[str] = None
    obituary_is_ai_generated: bool
    biography_is_ai_generated: bool
    privacy: str
    status: str
    follower_count: int
    tribute_count: int
    slug: str
    last_interaction_at: datetime
    purge_after_days: int
    created_at: datetime


class HostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    user_id: str
    role: str
    relationship: str
    relationship_detail: Optional[str] = None
    invited_by: Optional[str] = None
    accepted_at: Optional[datetime] = None
    created_at: datetime


class FollowResponse(BaseModel):
    following: bool
    follower_count: int
