"""
Models package
SQLAlchemy models and DB connection setup
"""

from .base import Base, AsyncSessionLocal, get_async_session, init_db, close_db
from .user import Profile
from .memorial import Memorial, MemorialHost, Follower
from .tribute import Tribute, TributeComment, Reaction
from .living_tribute import LivingTribute, LivingTributeMessage
from .letter import LegacyLetter
from .vault import VaultItem, TimeCapsule
from .scrapbook import ScrapbookPage
from .ai_generation import AIGeneration
from .points import PointEntry, PointRedemption
from .badge import UserActivity, UserBadge
from .notification import Notification

__all__ = [
    "Base",
    "AsyncSessionLocal",
    "get_async_session",
    "init_db",
    "close_db",
    "Profile",
    "Memorial",
    "MemorialHost",
    "Follower",
    "Tribute",
    "TributeComment",
    "Reaction",
    "LivingTribute",
    "LivingTributeMessage",
    "LegacyLetter",
    "VaultItem",
    "TimeCapsule",
    "ScrapbookPage",
    "AIGeneration",
    "PointEntry",
    "PointRedemption",
    "UserActivity",
    "UserBadge",
    "Notification"
]
