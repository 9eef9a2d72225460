# foreverr/schemas/ai_schemas.py
"""
AI generation and moderation request / response schemas
"""

from typing import Any, Dict, List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

MAX_VIDEO_PHOTOS = 50


# requests
class ObituaryRequest(BaseModel):
    memorial_id: str
    style: Literal["formal", "warm", "celebratory"]


class BiographyRequest(BaseModel):
    memorial_id: str
    style: Literal["chronological", "thematic"]


class TributeSuggestionRequest(BaseModel):
    memorial_id: str
    attributes: Optional[str] = None
    impact: Optional[str] = None
    memories: Optional[str] = None


class PhotoRestoreRequest(BaseModel):
    memorial_id: str
    photo_url: str = Field(min_length=1)
    restore_type: Literal["restore", "colorize"]


class MemorialVideoRequest(BaseModel):
    memorial_id: str
    photo_urls: List[str] = Field(min_length=1, max_length=MAX_VIDEO_PHOTOS)
    music_url: Optional[str] = None
    title: Optional[str] = None


class VoiceRequest(BaseModel):
    memorial_id: str
    text: str = Field(min_length=1)
    voice_sample_url: Optional[str] = None


class ModerationRequest(BaseModel):
    content: str = Field(min_length=1)
    content_type: Optional[Literal["tribute", "comment", "obituary", "biography", "message"]] = None


# responses
class AIGenerationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    requested_by: str
    type: str
    provider: str
    model: str
    prompt_data: Optional[Dict[str, Any]] = None
    output_text: Optional[str] = None
    tokens_used: int
    cost_cents: int
    status: str
    style: Optional[str] = None
    created_at: datetime


class TextGenerationResponse(BaseModel):
    generation: AIGenerationResponse
    text: str


class PhotoRestoreResponse(BaseModel):
    restored_url: str
    before_url: str
    restore_type: str
    generation_id: str


class MemorialVideoResponse(BaseModel):
    video_url: str
    duration_seconds: int
    thumbnail_url: str
    title: str
    photo_count: int
    generation_id: str


class VoiceResponse(BaseModel):
    audio_url: str
    duration_seconds: int
    generation_id: str


class ModerationResponse(BaseModel):
    flagged: bool
    categories: Dict[str, bool]
    action: Literal["allow", "flag", "block"]
    content_type: Optional[str] = None
