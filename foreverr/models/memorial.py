"""
Memorial, host and follower models
"""

from sqlalchemy import Column, String, Text, DateTime, Date, Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from .base import Base, utcnow, new_id

class Memorial(Base):
    __tablename__ = "memorials"

    id = Column(String(36), primary_key=True, default=new_id)
    created_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100))
    last_name = Column(String(100), nullable=False, default="")
    nickname = Column(String(100))
    date_of_birth = Column(Date)
    date_of_death = Column(Date)
    place_of_birth = Column(String(200))
    place_of_death = Column(String(200))
    profile_photo_url = Column(Text)
    cover_photo_url = Column(Text)
    obituary = Column(Text)
    biography = Column(Text)
    obituary_is_ai_generated = Column(Boolean, default=False, nullable=False)
    biography_is_ai_generated = Column(Boolean, default=False, nullable=False)
    privacy = Column(SQLEnum("public", "private", name="memorial_privacy"), default="public", nullable=False)
    status = Column(SQLEnum("active", "archived", name="memorial_status"), default="active", nullable=False)
    follower_count = Column(Integer, default=0, nullable=False)
    tribute_count = Column(Integer, default=0, nullable=False)
    slug = Column(String(150), unique=True, nullable=False)
    last_interaction_at = Column(DateTime, default=utcnow, nullable=False)
    purge_after_days = Column(Integer, default=365, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

class MemorialHost(Base):
    __tablename__ = "memorial_hosts"
    __table_args__ = (UniqueConstraint("memorial_id", "user_id"),)

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    role = Column(SQLEnum("owner", "admin", "contributor", name="host_role"), nullable=False)
    relationship = Column(String(100), nullable=False)
    relationship_detail = Column(Text)
    invited_by = Column(String(36), ForeignKey("profiles.id"))
    accepted_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class Follower(Base):
    __tablename__ = "followers"
    __table_args__ = (UniqueConstraint("memorial_id", "user_id"),)

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    notify_on_new_tribute = Column(Boolean, default=True, nullable=False)
    notify_on_events = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
