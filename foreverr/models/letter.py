"""
Legacy letter model (messages delivered on a future date)
"""

from sqlalchemy import Column, String, Text, DateTime, Date, Boolean, ForeignKey
from sqlalchemy import Enum as SQLEnum
from .base import Base, utcnow, new_id

class LegacyLetter(Base):
    __tablename__ = "legacy_letters"

    id = Column(String(36), primary_key=True, default=new_id)
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    memorial_id = Column(String(36), ForeignKey("memorials.id"))
    recipient_name = Column(String(200), nullable=False)
    recipient_email = Column(String(255))
    recipient_user_id = Column(String(36), ForeignKey("profiles.id"), index=True)
    subject = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    media_url = Column(Text)
    delivery_date = Column(Date, nullable=False, index=True)
    delivery_type = Column(SQLEnum("in_app", "email", name="letter_delivery_type"), default="in_app", nullable=False)
    is_delivered = Column(Boolean, default=False, nullable=False)
    delivered_at = Column(DateTime)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow, nullable=False)
