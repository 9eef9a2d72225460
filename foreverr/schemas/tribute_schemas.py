from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator


class TributeCreate(BaseModel):
    type: Literal["text", "photo", "candle", "flower"] = "text"
    content: Optional[str] = None
    media_url: Optional[str] = None
    is_ai_generated: bool = False
    ribbon_type: str = "none"
    ribbon_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_body(self):
        if self.type == "text" and not (self.content and self.content.strip()):
            raise ValueError("text tributes need content")
        if self.type == "photo" and not self.media_url:
            raise ValueError("photo tributes need media_url")
        return self


class TributeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    author_id: str
    type: str
    content: Optional[str] = None
    media_url: Optional[str] = None
    is_ai_generated: bool
    is_flagged: bool
    like_count: int
    comment_count: int
    ribbon_type: str
    ribbon_count: int
    is_pinned: bool
    created_at: datetime


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)
    parent_comment_id: Optional[str] = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tribute_id: str
    author_id: str
    content: str
    parent_comment_id: Optional[str] = None
    is_flagged: bool
    like_count: int
    created_at: datetime


class ReactionToggleRequest(BaseModel):
    target_type: Literal["tribute", "comment"]
    target_id: str
    reaction_type: Literal["heart", "candle", "flower", "prayer", "dove"]


class ReactionToggleResponse(BaseModel):
    action: Literal["added", "removed"]


class PinRequest(BaseModel):
    is_pinned: bool
