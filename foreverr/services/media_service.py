# foreverr/services/media_service.py
"""
Media providers: Hugging Face photo restoration and ElevenLabs voice.

Without a provider key each call falls back to a mock URL so the rest of
the flow (generation log, response shape) stays the same.
"""

import math
from typing import Dict, Optional

import aiohttp

from foreverr.config import settings
from foreverr.services.storage_service import storage_service
from foreverr.utils.exceptions import ExternalServiceError
from foreverr.utils.logger import logger

HF_INFERENCE_URL = "https://api-inference.huggingface.co/models"
HF_MODELS = {
    "restore": "microsoft/bringing-old-photos-back-to-life",
    "colorize": "baldodge/DeOldify",
}

ELEVENLABS_API_URL = "https://api.elevenlabs.io/v1"
ELEVENLABS_MODEL = "eleven_monolingual_v1"
VOICE_SETTINGS = {
    "stability": 0.6,
    "similarity_boost": 0.75,
    "style": 0.3,
    "use_speaker_boost": True
}
# ~16kbps mp3
MP3_BYTES_PER_SECOND = 16 * 1024 // 8

# slideshow timing, seconds
SECONDS_PER_PHOTO = 5
TRANSITION_OVERLAP = 1
INTRO_SECONDS = 3
OUTRO_SECONDS = 4


def video_duration(photo_count: int) -> int:
    slideshow = photo_count * SECONDS_PER_PHOTO - (photo_count - 1) * TRANSITION_OVERLAP
    return slideshow + INTRO_SECONDS + OUTRO_SECONDS


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def audio_duration(byte_count: int) -> int:
    return round_half_up(byte_count / MP3_BYTES_PER_SECOND)


def mock_voice_duration(text: str) -> int:
    return max(5, round_half_up(len(text.split()) / 2.5))


class MediaService:
    def __init__(self):
        self.huggingface_token = settings.huggingface_token
        self.elevenlabs_api_key = settings.elevenlabs_api_key
        self.default_voice_id = settings.elevenlabs_default_voice_id

    async def restore_photo(self, memorial_id: str, photo_url: str, restore_type: str) -> Dict:
        if not self.huggingface_token:
            path = storage_service.build_path("photo-restore", memorial_id, "jpg", prefix=f"{restore_type}_")
            return {"url": storage_service.mock_url(path), "provider": "mock", "model": "mock"}

        model = HF_MODELS[restore_type]
        photo = await self._download(photo_url, "Failed to fetch original photo")
        restored = await self._huggingface_infer(model, photo, restore_type)

        path = storage_service.build_path("photo-restore", memorial_id, "jpg", prefix=f"{restore_type}_")
        return {"url": storage_service.save(path, restored), "provider": "huggingface", "model": model}

    async def render_video(self, memorial_id: str, job_id: str) -> str:
        # no renderer is wired in yet, the job id names the output file
        return storage_service.mock_url(f"memorial-video/{memorial_id}/{job_id}.mp4")

    async def generate_voice(
        self,
        memorial_id: str,
        voice_name: str,
        text: str,
        voice_sample_url: Optional[str] = None
    ) -> Dict:
        if not self.elevenlabs_api_key:
            path = storage_service.build_path("voice", memorial_id, "mp3")
            return {
                "url": storage_service.mock_url(path),
                "duration_seconds": mock_voice_duration(text),
                "provider": "mock",
                "model": "mock"
            }

        if voice_sample_url:
            sample = await self._download(voice_sample_url, "Failed to fetch voice sample")
            voice_id = await self._clone_voice(voice_name, memorial_id, sample)
        else:
            voice_id = self.default_voice_id

        audio = await self._synthesize(voice_id, text)
        path = storage_service.build_path("voice", memorial_id, "mp3")
        return {
            "url": storage_service.save(path, audio),
            "duration_seconds": audio_duration(len(audio)),
            "provider": "elevenlabs",
            "model": ELEVENLABS_MODEL
        }

    async def _download(self, url: str, error_message: str) -> bytes:
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise ExternalServiceError(error_message)
                    return await response.read()
        except aiohttp.ClientError as e:
            logger.error(f" Download failed ({url}): {e}")
            raise ExternalServiceError(error_message)

    async def _huggingface_infer(self, model: str, image: bytes, restore_type: str) -> bytes:
        headers = {"Authorization": f"Bearer {self.huggingface_token}"}
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(f"{HF_INFERENCE_URL}/{model}", headers=headers, data=image) as response:
                    if response.status == 503:
                        raise ExternalServiceError(
                            "The AI model is currently loading. Please try again in 30-60 seconds."
                        )
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f" Photo {restore_type} failed: {response.status} - {error_text}")
                        raise ExternalServiceError(f"Photo {restore_type} failed: {error_text}")
                    return await response.read()
        except aiohttp.ClientError as e:
            logger.error(f" Hugging Face request failed: {e}")
            raise ExternalServiceError(f"Photo {restore_type} failed")

    async def _clone_voice(self, voice_name: str, memorial_id: str, sample: bytes) -> str:
        form = aiohttp.FormData()
        form.add_field("name", f"{voice_name} - Memorial Voice")
        form.add_field("description", f"AI voice clone for memorial {memorial_id}")
        form.add_field("files", sample, filename="voice_sample.mp3", content_type="audio/mpeg")

        headers = {"xi-api-key": self.elevenlabs_api_key}
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(f"{ELEVENLABS_API_URL}/voices/add", headers=headers, data=form) as response:
                    payload = await response.json(content_type=None)
                    if response.status != 200:
                        logger.error(f" Voice cloning failed: {response.status} - {payload}")
                        raise ExternalServiceError(self._elevenlabs_error(payload, "Voice cloning failed"))
        except aiohttp.ClientError as e:
            logger.error(f" Voice cloning failed: {e}")
            raise ExternalServiceError("Voice cloning failed")

        logger.info(f" Voice cloned for memorial {memorial_id}: {payload['voice_id']}")
        return payload["voice_id"]

    async def _synthesize(self, voice_id: str, text: str) -> bytes:
        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self.elevenlabs_api_key
        }
        data = {
            "text": text,
            "model_id": ELEVENLABS_MODEL,
            "voice_settings": VOICE_SETTINGS
        }
        audio = b""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    f"{ELEVENLABS_API_URL}/text-to-speech/{voice_id}", headers=headers, json=data
                ) as response:
                    if response.status != 200:
                        payload = await response.json(content_type=None)
                        logger.error(f" TTS failed: {response.status} - {payload}")
                        raise ExternalServiceError(self._elevenlabs_error(payload, "Text-to-speech generation failed"))
                    async for chunk in response.content.iter_chunked(8192):
                        audio += chunk
        except aiohttp.ClientError as e:
            logger.error(f" TTS failed: {e}")
            raise ExternalServiceError("Text-to-speech generation failed")

        logger.info(f" TTS done ({len(audio)} bytes)")
        return audio

    def _elevenlabs_error(self, payload, default: str) -> str:
        detail = payload.get("detail") if isinstance(payload, dict) else None
        if isinstance(detail, dict) and detail.get("message"):
            return detail["message"]
        return default


media_service = MediaService()
