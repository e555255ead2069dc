"""Stage 2: upload the video bytes straight to S3."""

from __future__ import annotations

import logging
from pathlib import Path

from reelpost.errors import LocalIOError
from reelpost.publish.client import BufferClient

logger = logging.getLogger(__name__)


async def upload_object(
    client: BufferClient,
    url: str,
    file_path: Path,
    mime_type: str,
) -> int:
    """PUT the whole file to ``url`` in one request.

    Returns the number of bytes sent.
    """
    try:
        content = file_path.read_bytes()
    except OSError as exc:
        raise LocalIOError(f"Cannot read {file_path}: {exc}") from exc

    await client.put_object("upload to S3", url, content, mime_type)
    logger.info("Video uploaded to S3 successfully (%d bytes)", len(content))
    return len(content)
