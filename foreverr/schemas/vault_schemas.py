from typing import Any, Dict, List, Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


class VaultItemCreate(BaseModel):
    item_type: Literal["document", "photo", "video", "audio", "message"]
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    is_private: bool = False


class VaultItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    uploaded_by: str
    item_type: str
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias="item_metadata")
    is_private: bool
    created_at: datetime


class TimeCapsuleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    unlock_date: date
    recipient_ids: List[str] = Field(default_factory=list)
    notify_on_unlock: bool = True


class TimeCapsuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    created_by: str
    title: str
    description: Optional[str] = None
    # withheld while locked
    content: Optional[str] = None
    media_url: Optional[str] = None
    unlock_date: date
    recipient_ids: List[str] = Field(default_factory=list)
    notify_on_unlock: bool
    is_unlocked: bool
    unlocked_at: Optional[datetime] = None
    created_at: datetime
