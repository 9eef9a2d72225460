"""
Local media storage served under /static
"""

import uuid
from pathlib import Path

from foreverr.config import settings
from foreverr.utils.logger import logger


class StorageService:
    def __init__(self):
        self.media_dir = Path(settings.media_dir)
        self.public_base_url = settings.public_base_url.rstrip("/")
        self.mock_base_url = settings.mock_media_base_url.rstrip("/")

    def build_path(self, folder: str, memorial_id: str, extension: str, prefix: str = "") -> str:
        return f"{folder}/{memorial_id}/{prefix}{uuid.uuid4()}.{extension}"

    def save(self, relative_path: str, data: bytes) -> str:
        """Write bytes under media_dir and return their public URL"""
        target = self.media_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info(f" Media saved: {relative_path} ({len(data)} bytes)")
        return f"{self.public_base_url}/static/{relative_path}"

    def mock_url(self, relative_path: str) -> str:
        return f"{self.mock_base_url}/{relative_path}"


storage_service = StorageService()
