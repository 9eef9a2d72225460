from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ScrapbookPageCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    page_number: Optional[int] = Field(default=None, ge=1)
    layout_data: Dict[str, Any] = Field(default_factory=dict)
    background_color: Optional[str] = None
    background_image_url: Optional[str] = None


class ScrapbookPageUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    layout_data: Optional[Dict[str, Any]] = None
    background_color: Optional[str] = None
    background_image_url: Optional[str] = None
    is_published: Optional[bool] = None


class ScrapbookPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    memorial_id: str
    created_by: str
    title: str
    page_number: int
    layout_data: Optional[Dict[str, Any]] = None
    background_color: Optional[str] = None
    background_image_url: Optional[str] = None
    is_published: bool
    created_at: datetime
    updated_at: datetime
