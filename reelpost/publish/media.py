"""Stage 3: register the uploaded S3 object as Buffer media."""

from __future__ import annotations

import json
import logging

from reelpost.errors import RemoteContractError
from reelpost.models import MediaDetails, MediaRecord
from reelpost.publish.client import BufferClient

logger = logging.getLogger(__name__)

UPLOAD_MEDIA_PATH = "/i/uploads/upload_media.json"


def unwrap_result(payload: dict) -> dict | None:
    """Return the innermost ``result`` object of a proxy response.

    The proxy has been seen answering both ``{"result": {...}}`` and
    ``{"result": {"result": {...}}}``; both are accepted.
    """
    node = payload.get("result")
    if isinstance(node, dict) and isinstance(node.get("result"), dict):
        node = node["result"]
    return node if isinstance(node, dict) else None


def parse_media_record(payload: dict) -> MediaRecord:
    """Build a MediaRecord from a registration response.

    Raises:
        RemoteContractError: on any shape other than the two known
            nestings, on ``success: false``, or when ``upload_id`` or
            ``details.location`` is empty.
    """
    body = json.dumps(payload)
    result = unwrap_result(payload)
    if result is None:
        raise RemoteContractError(
            "Failed to register upload: unexpected response structure", body=body
        )
    if result.get("success") is False:
        raise RemoteContractError("Failed to register upload: rejected by Buffer", body=body)

    details = result.get("details")
    if not isinstance(details, dict):
        raise RemoteContractError("Video details not found in upload response", body=body)

    record = MediaRecord(
        upload_id=str(result.get("upload_id") or ""),
        title=result.get("title") or "",
        details=MediaDetails.from_dict(details),
        location=result.get("location") or "",
        type=result.get("type") or "",
        transcode_video=bool(result.get("transcodeVideo", False)),
        raw=result,
    )
    if not record.upload_id or not record.details.location:
        raise RemoteContractError(
            "Failed to register upload: missing upload_id or location", body=body
        )
    return record


async def register_upload(client: BufferClient, key: str) -> MediaRecord:
    """Tell Buffer the object under ``key`` is uploaded and fetch its metadata."""
    args = {"key": key, "serviceForceTranscodeVideo": False}
    payload = await client.rpc("register upload", UPLOAD_MEDIA_PATH, args)
    logger.debug("Register upload response: %s", json.dumps(payload, indent=2))

    record = parse_media_record(payload)
    logger.info(
        "Upload registered, video ID: %s (%dx%d, %d ms)",
        record.upload_id,
        record.details.width,
        record.details.height,
        record.details.duration_millis,
    )
    return record
