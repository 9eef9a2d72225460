from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, ForeignKey, JSON
from .base import Base, utcnow, new_id

class ScrapbookPage(Base):
    __tablename__ = "scrapbook_pages"

    id = Column(String(36), primary_key=True, default=new_id)
    memorial_id = Column(String(36), ForeignKey("memorials.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    title = Column(String(200), nullable=False)
    page_number = Column(Integer, nullable=False)
    layout_data = Column(JSON, default=dict)
    background_color = Column(String(20))
    background_image_url = Column(Text)
    is_published = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
