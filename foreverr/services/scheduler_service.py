from datetime import timedelta
from typing import Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.config import settings
from foreverr.models import AsyncSessionLocal, Memorial
from foreverr.models.base import utcnow
from foreverr.services.letter_service import letter_service
from foreverr.services.vault_service import vault_service
from foreverr.utils.logger import logger


class SchedulerService:
    def __init__(self):
        self.scheduler = AsyncIOScheduler()
        self.session_factory = AsyncSessionLocal

    def start(self):
        try:
            self.scheduler.add_job(
                func=self.daily_job,
                trigger=CronTrigger(hour=settings.delivery_hour, minute=0),
                id="daily_delivery"
            )
            self.scheduler.start()
            logger.info(f" Scheduler started - daily job at {settings.delivery_hour:02d}:00 UTC")
        except Exception as e:
            logger.error(f" Scheduler start failed: {e}")

    def stop(self):
        try:
            self.scheduler.shutdown()
            logger.info(" Scheduler stopped")
        except Exception as e:
            logger.error(f" Scheduler stop failed: {e}")

    async def daily_job(self) -> Dict[str, Optional[int]]:
        """Run every step in its own session. A failing step is logged and reported as None."""
        logger.info(" Daily job started")
        steps = {
            "deliver_due_letters": letter_service.deliver_due_letters,
            "unlock_due_capsules": vault_service.unlock_due_capsules,
            "archive_stale_memorials": self.archive_stale_memorials,
        }
        results: Dict[str, Optional[int]] = {}
        for name, step in steps.items():
            try:
                async with self.session_factory() as session:
                    results[name] = await step(session)
            except Exception as e:
                logger.error(f" {name} failed: {e}")
                results[name] = None
        logger.info(f" Daily job finished: {results}")
        return results

    async def archive_stale_memorials(self, session: AsyncSession) -> int:
        """Archive active memorials with no interaction for purge_after_days"""
        now = utcnow()
        result = await session.execute(
            select(Memorial).where(Memorial.status == "active")
        )
        stale = [
            m for m in result.scalars().all()
            if m.last_interaction_at + timedelta(days=m.purge_after_days) < now
        ]
        for memorial in stale:
            memorial.status = "archived"
        await session.commit()
        logger.info(f" Archived {len(stale)} stale memorials")
        return len(stale)


scheduler_service = SchedulerService()
