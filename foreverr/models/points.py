from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey
from .base import Base, utcnow, new_id

class PointEntry(Base):
    __tablename__ = "legacy_points"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    points = Column(Integer, nullable=False)
    action_type = Column(String(50), nullable=False)
    reference_id = Column(String(36))
    description = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class PointRedemption(Base):
    __tablename__ = "point_redemptions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    points_spent = Column(Integer, nullable=False)
    redemption_type = Column(String(50), nullable=False)
    reference_id = Column(String(36))
    created_at = Column(DateTime, default=utcnow, nullable=False)
