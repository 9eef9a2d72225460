"""
Legacy letters: written now, delivered on a future date
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import LegacyLetter
from foreverr.models.base import utcnow
from foreverr.schemas.letter_schemas import LegacyLetterCreate
from foreverr.services.memorial_service import memorial_service
from foreverr.services.notification_service import notification_service
from foreverr.services.points_service import points_service
from foreverr.services.profile_service import profile_service
from foreverr.utils.exceptions import ConflictError, InvalidRequestError, NotFoundError
from foreverr.utils.logger import logger


class LetterService:

    async def create_letter(self, session: AsyncSession, user_id: str, data: LegacyLetterCreate) -> LegacyLetter:
        if data.delivery_date <= utcnow().date():
            raise InvalidRequestError("delivery_date must be in the future")
        if data.delivery_type == "email" and not data.recipient_email:
            raise InvalidRequestError("recipient_email is required for email delivery")
        if data.memorial_id:
            await memorial_service.get_viewable(session, data.memorial_id, user_id)
        if data.recipient_user_id:
            await profile_service.require_profiles(session, [data.recipient_user_id], "recipient_user_id")

        letter = LegacyLetter(author_id=user_id, **data.model_dump())
        session.add(letter)
        await session.flush()

        await points_service.award(session, user_id, "letter_written", reference_id=letter.id)
        await session.commit()

        logger.info(f" Legacy letter scheduled: {letter.id} for {letter.delivery_date}")
        return letter

    async def list_mine(self, session: AsyncSession, user_id: str) -> List[LegacyLetter]:
        result = await session.execute(
            select(LegacyLetter)
            .where(LegacyLetter.author_id == user_id)
            .order_by(LegacyLetter.delivery_date.asc())
        )
        return list(result.scalars().all())

    async def list_received(self, session: AsyncSession, user_id: str) -> List[LegacyLetter]:
        result = await session.execute(
            select(LegacyLetter)
            .where(LegacyLetter.recipient_user_id == user_id, LegacyLetter.is_delivered.is_(True))
            .order_by(LegacyLetter.delivered_at.desc())
        )
        return list(result.scalars().all())

    async def get_letter(self, session: AsyncSession, letter_id: str, user_id: str) -> LegacyLetter:
        letter = await session.get(LegacyLetter, letter_id)
        if letter:
            if letter.author_id == user_id:
                return letter
            if letter.recipient_user_id == user_id and letter.is_delivered:
                return letter
        raise NotFoundError("Letter not found")

    async def mark_read(self, session: AsyncSession, letter_id: str, user_id: str) -> LegacyLetter:
        letter = await session.get(LegacyLetter, letter_id)
        if not letter or letter.recipient_user_id != user_id or not letter.is_delivered:
            raise NotFoundError("Letter not found")
        if not letter.is_read:
            letter.is_read = True
            letter.read_at = utcnow()
            await session.commit()
        return letter

    async def delete_letter(self, session: AsyncSession, letter_id: str, user_id: str):
        letter = await session.get(LegacyLetter, letter_id)
        if not letter or letter.author_id != user_id:
            raise NotFoundError("Letter not found")
        if letter.is_delivered:
            raise ConflictError("Delivered letters cannot be deleted")

        await session.execute(delete(LegacyLetter).where(LegacyLetter.id == letter_id))
        await session.commit()
        logger.info(f" Legacy letter deleted: {letter_id}")

    async def deliver_due_letters(self, session: AsyncSession, today: Optional[date] = None) -> int:
        today = today or utcnow().date()
        result = await session.execute(
            select(LegacyLetter).where(
                LegacyLetter.is_delivered.is_(False),
                LegacyLetter.delivery_date <= today
            )
        )
        letters = list(result.scalars().all())
        known = await profile_service.existing_ids(
            session, [letter.recipient_user_id for letter in letters if letter.recipient_user_id]
        )

        for letter in letters:
            letter.is_delivered = True
            letter.delivered_at = utcnow()

            if letter.delivery_type == "email":
                # no mailer here; the email worker picks delivered letters up
                logger.info(f" Letter {letter.id} handed off for email to {letter.recipient_email}")
            elif letter.recipient_user_id in known:
                notification_service.notify(
                    session,
                    letter.recipient_user_id,
                    type="letter_delivered",
                    title="A letter has arrived",
                    body=letter.subject,
                    data={"letter_id": letter.id}
                )

        await session.commit()
        logger.info(f" Delivered {len(letters)} legacy letters")
        return len(letters)


letter_service = LetterService()
