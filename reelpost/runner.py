"""One unattended invocation: pick a pending video, publish it, file it away."""

from __future__ import annotations

import logging
import random
from pathlib import Path

import httpx

from reelpost.captions import pick_caption
from reelpost.intake import find_video_file, move_to_done, prepare_dirs
from reelpost.models import Credentials, PostResult
from reelpost.orchestrator import UploadOrchestrator
from reelpost.publish.client import BufferClient

logger = logging.getLogger(__name__)


def _client(config, credentials: Credentials, transport: httpx.AsyncBaseTransport | None) -> BufferClient:
    return BufferClient(
        credentials,
        timeout=config.http_timeout,
        upload_timeout=config.upload_timeout,
        transport=transport,
    )


async def post_file(
    config,
    credentials: Credentials,
    video_path: Path,
    caption: str = "",
    transport: httpx.AsyncBaseTransport | None = None,
) -> PostResult:
    """Upload ``video_path`` and publish it with ``caption``. The file stays put."""
    async with _client(config, credentials, transport) as client:
        return await UploadOrchestrator(client).upload_video(video_path, caption)


async def run_once(
    config,
    credentials: Credentials,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
) -> Path | None:
    """Publish the first pending video and move it to the completion directory.

    Returns the video's new path, or None if the intake directory was empty,
    in which case no remote call is made.
    """
    intake_dir = Path(config.intake_dir)
    done_dir = Path(config.done_dir)
    prepare_dirs(intake_dir, done_dir)

    video_path = find_video_file(intake_dir)
    if video_path is None:
        logger.info("No videos waiting in %s", intake_dir)
        return None

    caption = pick_caption(Path(config.captions_path), config.default_caption, rng)
    logger.info("Selected caption: %s", caption)

    await post_file(config, credentials, video_path, caption, transport)
    return move_to_done(video_path, done_dir)
