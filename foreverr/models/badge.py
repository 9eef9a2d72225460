"""
Badges earned from recorded user activity
"""

from sqlalchemy import Column, String, DateTime, Boolean, Integer, ForeignKey, UniqueConstraint
from .base import Base, utcnow, new_id

class UserActivity(Base):
    __tablename__ = "user_activities"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False)
    reference_id = Column(String(36))
    created_at = Column(DateTime, default=utcnow, nullable=False)

class UserBadge(Base):
    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_type"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    badge_type = Column(String(50), nullable=False)
    badge_tier = Column(String(20), nullable=False)
    progress = Column(Integer, default=0, nullable=False)
    is_displayed = Column(Boolean, default=True, nullable=False)
    earned_at = Column(DateTime, default=utcnow, nullable=False)
