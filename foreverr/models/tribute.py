"""
Tribute wall models: tributes, comments and reactions
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from .base import Base, utcnow, new_id

class Tribute(Base):
    __tablename__ = "tributes"

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    type = Column(SQLEnum("text", "photo", "candle", "flower", name="tribute_type"), nullable=False)
    content = Column(Text)
    media_url = Column(Text)
    is_ai_generated = Column(Boolean, default=False, nullable=False)
    is_flagged = Column(Boolean, default=False, nullable=False)
    like_count = Column(Integer, default=0, nullable=False)
    comment_count = Column(Integer, default=0, nullable=False)
    ribbon_type = Column(String(50), default="none", nullable=False)
    ribbon_count = Column(Integer, default=0, nullable=False)
    is_pinned = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class TributeComment(Base):
    __tablename__ = "tribute_comments"

    id = Column(String(36), primary_key=True, default=new_id)
    tribute_id = Column(String(36), ForeignKey("tributes.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False)
    parent_comment_id = Column(String(36), ForeignKey("tribute_comments.id"))
    is_flagged = Column(Boolean, default=False, nullable=False)
    like_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (UniqueConstraint("user_id", "target_type", "target_id", "reaction_type"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    target_type = Column(SQLEnum("tribute", "comment", name="reaction_target"), nullable=False)
    target_id = Column(String(36), nullable=False, index=True)
    reaction_type = Column(SQLEnum("heart", "candle", "flower", "prayer", "dove", name="reaction_type"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
