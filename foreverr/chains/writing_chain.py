from typing import Dict, List, Optional

from langchain_core.messages import AIMessage
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from langsmith import traceable

from foreverr.config import settings
from foreverr.models import Memorial, MemorialHost
from foreverr.prompts.writing_prompts import WritingPrompts
from foreverr.utils.logger import logger

# (temperature, max_tokens) per generation type
LLM_PARAMS = {
    "obituary": (0.7, 800),
    "biography": (0.7, 1500),
    "tribute": (0.8, 300),
}


def _fact(value) -> str:
    return str(value) if value else "unknown"


def _join_lines(lines: List[Optional[str]]) -> str:
    return "\n".join(line for line in lines if line)


class MemorialWritingChain:
    def __init__(self):
        self.model_name = settings.openai_model
        self.llms = {
            kind: ChatOpenAI(
                model=self.model_name,
                temperature=temperature,
                max_tokens=max_tokens,
                openai_api_key=settings.openai_api_key
            )
            for kind, (temperature, max_tokens) in LLM_PARAMS.items()
        }

    @traceable(name="write_obituary")
    async def write_obituary(self, memorial: Memorial, style: str, host: Optional[MemorialHost]) -> Dict:
        context = _join_lines([
            f"Biography notes: {memorial.biography}" if memorial.biography else None,
            f"Relationship to requestor: {host.relationship}" if host and host.relationship else None,
            f"Detail: {host.relationship_detail}" if host and host.relationship_detail else None,
        ])
        return await self._generate(
            "obituary",
            WritingPrompts.OBITUARY_SYSTEM,
            WritingPrompts.OBITUARY,
            {
                **self._memorial_facts(memorial),
                "context": context,
                "style_instruction": WritingPrompts.OBITUARY_STYLES.get(style, WritingPrompts.OBITUARY_STYLES["warm"])
            }
        )

    @traceable(name="write_biography")
    async def write_biography(self, memorial: Memorial, style: str, hosts: List[MemorialHost]) -> Dict:
        relationships = ", ".join(
            f"{h.relationship} ({h.relationship_detail})" if h.relationship_detail else h.relationship
            for h in hosts
        )
        context = _join_lines([
            f"- Known as: {memorial.nickname}" if memorial.nickname else None,
            f"\nExisting obituary for reference:\n{memorial.obituary}" if memorial.obituary else None,
            f"\nRelationships: {relationships}" if relationships else None,
        ])
        return await self._generate(
            "biography",
            WritingPrompts.BIOGRAPHY_SYSTEM,
            WritingPrompts.BIOGRAPHY,
            {
                **self._memorial_facts(memorial),
                "context": context,
                "style_instruction": WritingPrompts.BIOGRAPHY_STYLES.get(
                    style, WritingPrompts.BIOGRAPHY_STYLES["chronological"]
                )
            }
        )

    @traceable(name="write_tribute")
    async def write_tribute(
        self,
        memorial: Memorial,
        attributes: Optional[str] = None,
        impact: Optional[str] = None,
        memories: Optional[str] = None
    ) -> Dict:
        full_name = memorial.full_name
        if memorial.nickname:
            full_name = f"{full_name} ({memorial.nickname})"
        context = _join_lines([
            f"Their qualities and attributes: {attributes}" if attributes else None,
            f"Their impact on others: {impact}" if impact else None,
            f"Cherished memories: {memories}" if memories else None,
        ])
        return await self._generate(
            "tribute",
            WritingPrompts.TRIBUTE_SYSTEM,
            WritingPrompts.TRIBUTE,
            {
                "full_name": full_name,
                "called_name": memorial.nickname or memorial.first_name,
                "context": context
            }
        )

    def _memorial_facts(self, memorial: Memorial) -> Dict[str, str]:
        return {
            "full_name": memorial.full_name,
            "date_of_birth": _fact(memorial.date_of_birth),
            "date_of_death": _fact(memorial.date_of_death),
            "place_of_birth": _fact(memorial.place_of_birth),
            "place_of_death": _fact(memorial.place_of_death),
        }

    async def _generate(self, kind: str, system: str, template: str, variables: Dict[str, str]) -> Dict:
        prompt = ChatPromptTemplate.from_messages([("system", system), ("human", template)])
        messages = prompt.format_messages(**variables)
        prompt_length = len(messages[-1].content)

        ai_response = await self.llms[kind].ainvoke(messages)
        text = ai_response.content if isinstance(ai_response, AIMessage) else str(ai_response)
        usage = getattr(ai_response, "usage_metadata", None) or {}
        tokens_used = usage.get("total_tokens") or 0

        logger.info(f" {kind} generated ({tokens_used} tokens)")
        return {
            "text": text.strip(),
            "tokens_used": tokens_used,
            "prompt_length": prompt_length
        }


writing_chain = MemorialWritingChain()
