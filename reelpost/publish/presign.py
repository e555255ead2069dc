"""Stage 1: ask Buffer for a pre-signed S3 upload URL."""

from __future__ import annotations

import json
import logging

from reelpost.errors import RemoteContractError
from reelpost.models import UploadTarget
from reelpost.publish.client import BufferClient

logger = logging.getLogger(__name__)

OPERATION = "s3PreSignedURL"
UPLOAD_TYPE = "postAsset"

QUERY = """
query s3PreSignedURL($input: S3PreSignedURLInput!) {
  s3PreSignedURL(input: $input) {
    url
    key
    bucket
  }
}
"""


async def request_upload_target(
    client: BufferClient,
    file_name: str,
    mime_type: str,
) -> UploadTarget:
    """Request a write-once upload destination for ``file_name``.

    Args:
        client: Open Buffer client; its credentials supply the organization id.
        file_name: Base name of the local file.
        mime_type: MIME type the object will be uploaded with.

    Returns:
        The pre-signed URL and the storage key to register afterwards.

    Raises:
        RemoteContractError: if the response carries GraphQL errors or lacks
            ``url`` or ``key``.
        TransportError: on network failure or a non-2xx status.
    """
    action = "get S3 pre-signed URL"
    variables = {
        "input": {
            "organizationId": client.credentials.organization_id,
            "fileName": file_name,
            "mimeType": mime_type,
            "uploadType": UPLOAD_TYPE,
        }
    }
    payload = await client.graphql(action, OPERATION, QUERY, variables)

    if payload.get("errors"):
        raise RemoteContractError(f"Failed to {action}", body=json.dumps(payload))

    node = (payload.get("data") or {}).get(OPERATION) or {}
    url = node.get("url")
    key = node.get("key")
    if not url or not key:
        raise RemoteContractError(f"Failed to {action}", body=json.dumps(payload))

    logger.info("Got S3 pre-signed URL for %s (key %s)", file_name, key)
    return UploadTarget(url=url, key=key, bucket=node.get("bucket") or "")
