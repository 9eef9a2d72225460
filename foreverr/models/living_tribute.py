"""
Living tribute models (pages honoring someone still living)
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, ForeignKey
from sqlalchemy import Enum as SQLEnum
from .base import Base, utcnow, new_id

class LivingTribute(Base):
    __tablename__ = "living_tributes"

    id = Column(String(36), primary_key=True, default=new_id)
    created_by = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    honoree_name = Column(String(200), nullable=False)
    honoree_user_id = Column(String(36), ForeignKey("profiles.id"), index=True)
    honoree_photo_url = Column(Text)
    cover_photo_url = Column(Text)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    occasion = Column(String(100))
    privacy = Column(SQLEnum("public", "private", name="living_tribute_privacy"), default="public", nullable=False)
    status = Column(
        SQLEnum("active", "converted_to_memorial", "archived", name="living_tribute_status"),
        default="active",
        nullable=False
    )
    message_count = Column(Integer, default=0, nullable=False)
    memorial_id = Column(String(36), ForeignKey("memorials.id"))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class LivingTributeMessage(Base):
    __tablename__ = "living_tribute_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    tribute_id = Column(String(36), ForeignKey("living_tributes.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False)
    media_url = Column(Text)
    is_flagged = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
