"""
AI generation log (one row per provider call)
"""

from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, JSON
from .base import Base, utcnow, new_id

class AIGeneration(Base):
    __tablename__ = "ai_generations"

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    requested_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    type = Column(String(50), nullable=False)
    provider = Column(String(50), nullable=False)
    model = Column(String(100), nullable=False)
    prompt_data = Column(JSON, default=dict)
    output_text = Column(Text)
    tokens_used = Column(Integer, default=0, nullable=False)
    cost_cents = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default="completed", nullable=False)
    style = Column(String(50))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
