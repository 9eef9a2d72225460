from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from .memorial_schemas import MemorialResponse


class LivingTributeCreate(BaseModel):
    honoree_name: str = Field(min_length=1, max_length=200)
    honoree_user_id: Optional[str] = None
    honoree_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    occasion: Optional[str] = None
    privacy: Literal["public", "private"] = "public"


class LivingTributeUpdate(BaseModel):
    honoree_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    honoree_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    occasion: Optional[str] = None
    privacy: Optional[Literal["public", "private"]] = None
    status: Optional[Literal["active", "archived"]] = None


class LivingTributeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    honoree_name: str
    honoree_user_id: Optional[str] = None
    honoree_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    title: str
    description: Optional[str] = None
    occasion: Optional[str] = None
    privacy: str
    status: str
    message_count: int
    memorial_id: Optional[str] = None
    created_at: datetime


class LivingTributeMessageCreate(BaseModel):
    content: str = Field(min_length=1)
    media_url: Optional[str] = None


class LivingTributeMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tribute_id: str
    author_id: str
    content: str
    media_url: Optional[str] = None
    is_flagged: bool
    created_at: datetime


class ConvertToMemorialResponse(BaseModel):
    memorial: MemorialResponse
    tribute: LivingTributeResponse
