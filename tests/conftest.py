"""Shared fixtures: a scripted stand-in for Buffer's endpoints."""

from __future__ import annotations

import copy
import json

import httpx
import pytest

from reelpost.models import Credentials

S3_URL = "https://buffer-media-uploads.s3.amazonaws.com/uploads/abc.mp4?X-Amz-Signature=secret"
S3_KEY = "uploads/abc.mp4"

MEDIA_RESULT = {
    "success": True,
    "upload_id": "vid_123",
    "title": "clip",
    "location": "https://cdn.buffer.com/clip.mp4",
    "type": "video",
    "transcodeVideo": False,
    "details": {
        "location": "https://cdn.buffer.com/clip.mp4",
        "file_size": 1024,
        "file_extension": "mp4",
        "duration": 12,
        "duration_millis": 12000,
        "width": 1080,
        "height": 1920,
    },
}


class FakeBuffer:
    """Answers the presign, S3, register and create-post calls.

    Each response is a ``(status, json_body)`` pair that tests may replace.
    Every request seen is kept in ``requests``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.s3_url = S3_URL
        self.s3_key = S3_KEY
        self.presign = (200, {"data": {"s3PreSignedURL": {"url": S3_URL, "key": S3_KEY, "bucket": "buffer-media"}}})
        self.s3 = (200, None)
        self.register = (200, {"result": {"result": copy.deepcopy(MEDIA_RESULT)}})
        self.create = (200, {"result": {"success": True, "updates": [{"id": "upd_1"}]}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "graph.buffer.com":
            return self._respond(self.presign)
        if request.method == "PUT":
            return self._respond(self.s3)
        if request.url.path == "/rpc/composerApiProxy":
            inner = json.loads(json.loads(request.content)["args"])
            if inner["url"] == "/i/uploads/upload_media.json":
                return self._respond(self.register)
            if inner["url"] == "/1/updates/create.json":
                return self._respond(self.create)
        return httpx.Response(404, text="not found")

    @staticmethod
    def _respond(canned) -> httpx.Response:
        status, body = canned
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def inner_calls(self) -> list[dict]:
        """Decoded inner requests sent through the RPC proxy, in order."""
        calls = []
        for r in self.requests:
            if r.url.path == "/rpc/composerApiProxy":
                calls.append(json.loads(json.loads(r.content)["args"]))
        return calls

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]


@pytest.fixture
def fake_buffer():
    return FakeBuffer()


@pytest.fixture
def media_result():
    """A registration result as Buffer returns it, without the proxy envelope."""
    return copy.deepcopy(MEDIA_RESULT)


@pytest.fixture
def credentials():
    return Credentials(
        session_cookie="buffer_session=abc",
        organization_id="org_1",
        channel_id="chan_1",
        user_id="user_1",
    )


@pytest.fixture
def video(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64)
    return path
