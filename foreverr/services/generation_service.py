import math
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foreverr.models import AIGeneration

# OpenAI text generation, cents per token
TEXT_COST_PER_TOKEN = 0.003


def text_cost_cents(tokens_used: int) -> int:
    return math.ceil(tokens_used * TEXT_COST_PER_TOKEN)


class GenerationService:

    async def record(
        self,
        session: AsyncSession,
        memorial_id: str,
        requested_by: str,
        type: str,
        provider: str,
        model: str,
        prompt_data: Dict[str, Any],
        output_text: Optional[str],
        tokens_used: int = 0,
        cost_cents: int = 0,
        style: Optional[str] = None,
        status: str = "completed"
    ) -> AIGeneration:
        """Log one provider call. Caller commits."""
        generation = AIGeneration(
            memorial_id=memorial_id,
            requested_by=requested_by,
            type=type,
            provider=provider,
            model=model,
            prompt_data=prompt_data,
            output_text=output_text,
            tokens_used=tokens_used,
            cost_cents=cost_cents,
            style=style,
            status=status
        )
        session.add(generation)
        await session.flush()
        return generation

    async def list_for_memorial(
        self,
        session: AsyncSession,
        memorial_id: str,
        type: Optional[str],
        offset: int,
        limit: int
    ) -> List[AIGeneration]:
        query = select(AIGeneration).where(AIGeneration.memorial_id == memorial_id)
        if type:
            query = query.where(AIGeneration.type == type)
        result = await session.execute(
            query.order_by(AIGeneration.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())


generation_service = GenerationService()
