"""Run the four upload stages in order for a single video."""

from __future__ import annotations

import enum
import logging
import mimetypes
from pathlib import Path

from reelpost.errors import LocalIOError
from reelpost.models import PostResult
from reelpost.publish.client import BufferClient
from reelpost.publish.media import register_upload
from reelpost.publish.posts import create_post
from reelpost.publish.presign import request_upload_target
from reelpost.publish.storage import upload_object

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "video/mp4"


class Stage(str, enum.Enum):
    IDLE = "idle"
    PRESIGN_REQUESTED = "presign_requested"
    UPLOADED = "uploaded"
    REGISTERED = "registered"
    POSTED = "posted"
    FAILED = "failed"


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or DEFAULT_MIME_TYPE


class UploadOrchestrator:
    """Upload one video and publish it as a reel.

    Each instance drives exactly one run through
    ``IDLE -> PRESIGN_REQUESTED -> UPLOADED -> REGISTERED -> POSTED``.
    Any failure leaves it in ``FAILED`` and re-raises; there is no way back
    into the sequence, a new run needs a new orchestrator.
    """

    def __init__(self, client: BufferClient):
        self.client = client
        self.stage = Stage.IDLE

    async def upload_video(self, file_path: Path, text: str = "") -> PostResult:
        if self.stage is not Stage.IDLE:
            raise RuntimeError(f"Orchestrator already used (stage: {self.stage.value})")

        try:
            return await self._run(file_path, text)
        except Exception:
            self.stage = Stage.FAILED
            raise

    async def _run(self, file_path: Path, text: str) -> PostResult:
        logger.info("Starting upload of %s...", file_path)
        try:
            size = file_path.stat().st_size
        except OSError as exc:
            raise LocalIOError(f"File not found: {file_path}") from exc

        file_name = file_path.name
        mime_type = guess_mime_type(file_path)
        logger.info("File: %s", file_name)
        logger.info("Size: %.2f MB", size / 1024 / 1024)
        logger.info("MIME Type: %s", mime_type)

        logger.info("1. Getting S3 pre-signed URL...")
        target = await request_upload_target(self.client, file_name, mime_type)
        self.stage = Stage.PRESIGN_REQUESTED

        logger.info("2. Uploading video to S3...")
        await upload_object(self.client, target.url, file_path, mime_type)
        self.stage = Stage.UPLOADED

        logger.info("3. Registering upload with Buffer...")
        record = await register_upload(self.client, target.key)
        self.stage = Stage.REGISTERED

        logger.info("4. Creating post in Buffer...")
        result = await create_post(self.client, record, text)
        self.stage = Stage.POSTED

        logger.info("Upload complete!")
        return result
