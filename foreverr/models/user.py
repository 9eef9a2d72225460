"""
User profile model
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON
from .base import Base, utcnow

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    display_name = Column(String(100), nullable=False)
    email = Column(String(255))
    avatar_url = Column(Text)
    bio = Column(Text)
    is_verified = Column(Boolean, default=False, nullable=False)
    notification_preferences = Column(JSON, default=dict)
    onboarding_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
