# foreverr/schemas/letter_schemas.py

from typing import Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


# request schema
class LegacyLetterCreate(BaseModel):
    memorial_id: Optional[str] = None
    recipient_name: str = Field(min_length=1, max_length=200)
    recipient_email: Optional[str] = None
    recipient_user_id: Optional[str] = None
    subject: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    media_url: Optional[str] = None
    delivery_date: date
    delivery_type: Literal["in_app", "email"] = "in_app"


class LegacyLetterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    memorial_id: Optional[str] = None
    recipient_name: str
    recipient_email: Optional[str] = None
    recipient_user_id: Optional[str] = None
    subject: str
    content: str
    media_url: Optional[str] = None
    delivery_date: date
    delivery_type: str
    is_delivered: bool
    delivered_at: Optional[datetime] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
