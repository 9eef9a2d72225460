"""
Content moderation through the OpenAI moderation endpoint
"""

from typing import Dict, Optional

import aiohttp

from foreverr.config import settings
from foreverr.utils.exceptions import ExternalServiceError, InvalidRequestError
from foreverr.utils.logger import logger

# any of these blocks the content outright
SEVERE_CATEGORIES = ("sexual/minors", "hate/threatening", "violence/graphic", "self-harm/intent")


def decide_action(flagged: bool, categories: Dict[str, bool]) -> str:
    if any(categories.get(category) for category in SEVERE_CATEGORIES):
        return "block"
    return "flag" if flagged else "allow"


class ModerationService:
    def __init__(self):
        self.url = settings.openai_moderation_url
        self.api_key = settings.openai_api_key

    async def moderate(self, content: str, content_type: Optional[str] = None) -> Dict:
        if not content or not content.strip():
            raise InvalidRequestError("Content is required")

        result = await self._request_moderation(content)
        flagged = bool(result.get("flagged"))
        categories = {name: bool(value) for name, value in (result.get("categories") or {}).items()}
        action = decide_action(flagged, categories)

        if action != "allow":
            logger.info(f" Moderation {action}: {content_type or 'content'} {[c for c, v in categories.items() if v]}")

        return {
            "flagged": flagged,
            "categories": categories,
            "action": action,
            "content_type": content_type
        }

    async def screen_user_content(self, content: Optional[str], content_type: str) -> bool:
        """Auto-moderation hook for user posts. Returns is_flagged; raises on block."""
        if not settings.auto_moderation or not content or not content.strip():
            return False

        verdict = await self.moderate(content, content_type)
        if verdict["action"] == "block":
            raise InvalidRequestError("Content violates community guidelines")
        return verdict["action"] == "flag"

    async def _request_moderation(self, content: str) -> Dict:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.url, headers=headers, json={"input": content}) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f" Moderation request failed: {response.status} - {error_text}")
                        raise ExternalServiceError(f"Moderation service error ({response.status})")
                    payload = await response.json()
        except aiohttp.ClientError as e:
            logger.error(f" Moderation request failed: {e}")
            raise ExternalServiceError("Moderation service unavailable")

        results = payload.get("results") or [{}]
        return results[0]


moderation_service = ModerationService()
