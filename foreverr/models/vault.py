"""
Memory vault items and time capsules
"""

from sqlalchemy import Column, String, Text, DateTime, Date, Boolean, ForeignKey, JSON
from sqlalchemy import Enum as SQLEnum
from .base import Base, utcnow, new_id

class VaultItem(Base):
    __tablename__ = "memory_vault_items"

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    uploaded_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    item_type = Column(
        SQLEnum("document", "photo", "video", "audio", "message", name="vault_item_type"),
        nullable=False
    )
    title = Column(String(200), nullable=False)
    description = Column(Text)
    content = Column(Text)
    media_url = Column(Text)
    thumbnail_url = Column(Text)
    # "metadata" is reserved on declarative classes
    item_metadata = Column("metadata", JSON, default=dict)
    is_private = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class TimeCapsule(Base):
    __tablename__ = "time_capsules"

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    content = Column(Text)
    media_url = Column(Text)
    unlock_date = Column(Date, nullable=False, index=True)
    recipient_ids = Column(JSON, default=list)
    notify_on_unlock = Column(Boolean, default=True, nullable=False)
    is_unlocked = Column(Boolean, default=False, nullable=False)
    unlocked_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow, nullable=False)
