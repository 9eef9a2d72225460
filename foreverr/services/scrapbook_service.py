from typing import List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import ScrapbookPage, UserActivity
from foreverr.schemas.scrapbook_schemas import ScrapbookPageCreate, ScrapbookPageUpdate
from foreverr.services.badge_service import badge_service
from foreverr.services.memorial_service import memorial_service
from foreverr.services.points_service import points_service
from foreverr.utils.exceptions import NotFoundError, PermissionDeniedError
from foreverr.utils.logger import logger


class ScrapbookService:

    async def list_pages(self, session: AsyncSession, memorial_id: str, user_id: str) -> List[ScrapbookPage]:
        await memorial_service.get_viewable(session, memorial_id, user_id)
        result = await session.execute(
            select(ScrapbookPage)
            .where(ScrapbookPage.memorial_id == memorial_id)
            .order_by(ScrapbookPage.page_number.asc())
        )
        return list(result.scalars().all())

    async def create_page(
        self,
        session: AsyncSession,
        memorial_id: str,
        user_id: str,
        data: ScrapbookPageCreate
    ) -> ScrapbookPage:
        await memorial_service.get_viewable(session, memorial_id, user_id)

        page_number = data.page_number
        if page_number is None:
            last = await session.scalar(
                select(func.max(ScrapbookPage.page_number)).where(ScrapbookPage.memorial_id == memorial_id)
            )
            page_number = (last or 0) + 1

        page = ScrapbookPage(
            memorial_id=memorial_id,
            created_by=user_id,
            **data.model_dump(exclude={"page_number"}),
            page_number=page_number
        )
        session.add(page)
        await session.commit()

        logger.info(f" Scrapbook page {page_number} created on {memorial_id}")
        return page

    async def update_page(
        self,
        session: AsyncSession,
        page_id: str,
        user_id: str,
        data: ScrapbookPageUpdate
    ) -> ScrapbookPage:
        page = await session.get(ScrapbookPage, page_id)
        if not page:
            raise NotFoundError("Scrapbook page not found")
        await memorial_service.get_viewable(session, page.memorial_id, user_id)
        if page.created_by != user_id and not await memorial_service.get_host(session, page.memorial_id, user_id):
            raise PermissionDeniedError("Only the creator or a memorial host can edit this page")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(page, field, value)

        if data.is_published and not await self._was_published(session, page.id):
            await badge_service.record_activity(session, page.created_by, "scrapbook_published", reference_id=page.id)
            await points_service.award(session, page.created_by, "scrapbook_published", reference_id=page.id)

        await session.commit()
        return page

    async def _was_published(self, session: AsyncSession, page_id: str) -> bool:
        result = await session.execute(
            select(UserActivity.id).where(
                UserActivity.activity_type == "scrapbook_published",
                UserActivity.reference_id == page_id
            )
        )
        return result.first() is not None


scrapbook_service = ScrapbookService()
