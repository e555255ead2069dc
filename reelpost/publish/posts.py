"""Stage 4: create the post that publishes the registered video.

This is the only call with a visible, irreversible effect. It is never
retried: Buffer exposes no idempotency key, so a second attempt can publish
the same reel twice.
"""

from __future__ import annotations

import json
import logging

from reelpost.errors import RemoteContractError
from reelpost.models import MediaRecord, PostResult
from reelpost.publish.client import BufferClient
from reelpost.publish.media import unwrap_result

logger = logging.getLogger(__name__)

CREATE_UPDATE_PATH = "/1/updates/create.json"
UPDATE_TYPE = "reels"


def build_post_payload(record: MediaRecord, channel_id: str, text: str = "") -> dict:
    """Build the composer payload for an immediate reel post."""
    details = record.details
    return {
        "share_mode": "shareNow",
        "now": True,
        "top": False,
        "is_draft": False,
        "shorten": True,
        "text": text,
        "scheduling_type": "direct",
        "fb_text": "",
        "entities": None,
        "annotations": [],
        "profile_ids": [channel_id],
        "attachment": False,
        "via": None,
        "duplicated_from": None,
        "created_source": "channel",
        "channel_data": {"instagram": {"share_to_feed": True}},
        "tags": [],
        "update_type": UPDATE_TYPE,
        "media": {
            "progress": 100,
            "uploaded": True,
            "uploading_type": "video",
            "video": {
                "title": record.title,
                "id": record.upload_id,
                "details": {
                    "location": details.location,
                    "transcoded_location": details.location,
                    "file_size": details.file_size,
                    "duration": details.duration,
                    "duration_millis": details.duration_millis,
                    "width": details.width,
                    "height": details.height,
                },
                "thumb_offset": 0,
                "thumbnails": [],
            },
            "thumbnail": "",
        },
        "ai_assisted": False,
        "channelGroupIds": [],
    }


def _update_ids(result: dict) -> list[str]:
    ids = []
    for update in result.get("updates") or []:
        if isinstance(update, dict) and update.get("id"):
            ids.append(str(update["id"]))
    single = result.get("update")
    if isinstance(single, dict) and single.get("id"):
        ids.append(str(single["id"]))
    return ids


async def create_post(client: BufferClient, record: MediaRecord, text: str = "") -> PostResult:
    """Submit a post referencing ``record`` for immediate publication.

    Raises:
        RemoteContractError: if Buffer answers with ``success: false``.
        TransportError: on network failure or a non-2xx status.
    """
    post_data = build_post_payload(record, client.credentials.channel_id, text)
    payload = await client.rpc("create post", CREATE_UPDATE_PATH, post_data)
    logger.debug("Create post response: %s", json.dumps(payload, indent=2))

    result = unwrap_result(payload) or payload
    if result.get("success") is False:
        raise RemoteContractError("Failed to create post", body=json.dumps(payload))

    post = PostResult(
        success=True,
        message=str(result.get("message") or ""),
        update_ids=_update_ids(result),
        raw=payload,
    )
    logger.info("Post created successfully (updates: %s)", ", ".join(post.update_ids) or "n/a")
    return post
