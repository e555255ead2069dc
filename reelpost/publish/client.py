"""HTTP transport shared by the four upload stages.

Buffer's web app talks to two private endpoints: a GraphQL API and a
generic RPC proxy that forwards an inner REST-shaped request. Both expect
the headers a logged-in browser would send, including the session cookie.
"""

from __future__ import annotations

import json
import logging

import httpx

from reelpost.errors import RemoteContractError, TransportError
from reelpost.models import Credentials

logger = logging.getLogger(__name__)

GRAPHQL_URL = "https://graph.buffer.com/"
RPC_PROXY_URL = "https://publish.buffer.com/rpc/composerApiProxy"
PUBLISH_ORIGIN = "https://publish.buffer.com"
CLIENT_ID = "webapp-publishing"
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36"
)


def rpc_envelope(url: str, args: dict, method: str = "POST") -> dict:
    """Wrap an inner request in the proxy envelope.

    The proxy takes a single ``args`` field whose value is the JSON-encoded
    inner request, not a nested object.
    """
    inner = {"url": url, "args": args, "HTTPMethod": method}
    return {"args": json.dumps(inner)}


def _safe_url(url: str) -> str:
    # Pre-signed URLs carry their signature in the query string.
    return url.split("?", 1)[0]


class BufferClient:
    """Thin async wrapper around ``httpx.AsyncClient`` for Buffer's web API.

    Use as an async context manager so the connection pool is closed::

        async with BufferClient(credentials) as client:
            ...

    ``transport`` is handed to httpx unchanged, which lets tests script
    responses with ``httpx.MockTransport``.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = 60.0,
        upload_timeout: float = 600.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.credentials = credentials
        self.upload_timeout = upload_timeout
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "BufferClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _browser_headers(self, referer: str) -> dict[str, str]:
        return {
            "Origin": PUBLISH_ORIGIN,
            "Referer": referer,
            "User-Agent": USER_AGENT,
        }

    def _session_headers(self, referer: str) -> dict[str, str]:
        headers = self._browser_headers(referer)
        headers["Cookie"] = self.credentials.session_cookie
        return headers

    async def _send(self, action: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"Failed to {action}: {method} {_safe_url(url)}: {exc}") from exc

        if not resp.is_success:
            logger.error("%s %s returned %d", method, _safe_url(url), resp.status_code)
            raise TransportError(
                f"Failed to {action}",
                status_code=resp.status_code,
                body=resp.text,
            )
        return resp

    @staticmethod
    def _decode(action: str, resp: httpx.Response) -> dict:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise RemoteContractError(
                f"Failed to {action}: response is not JSON", body=resp.text
            ) from exc
        if not isinstance(payload, dict):
            raise RemoteContractError(
                f"Failed to {action}: expected a JSON object", body=resp.text
            )
        return payload

    async def graphql(self, action: str, operation: str, query: str, variables: dict) -> dict:
        """POST a GraphQL operation and return the decoded response body."""
        headers = self._session_headers(f"{PUBLISH_ORIGIN}/")
        headers["x-buffer-client-id"] = CLIENT_ID
        resp = await self._send(
            action,
            "POST",
            GRAPHQL_URL,
            params={"_o": operation},
            json={"operationName": operation, "variables": variables, "query": query},
            headers=headers,
        )
        return self._decode(action, resp)

    async def rpc(self, action: str, url: str, args: dict, method: str = "POST") -> dict:
        """Send an inner request through the composer RPC proxy."""
        referer = f"{PUBLISH_ORIGIN}/channels/{self.credentials.channel_id}"
        resp = await self._send(
            action,
            "POST",
            RPC_PROXY_URL,
            json=rpc_envelope(url, args, method),
            headers=self._session_headers(referer),
        )
        return self._decode(action, resp)

    async def put_object(self, action: str, url: str, content: bytes, content_type: str) -> None:
        """PUT raw bytes to a pre-signed object-storage URL.

        The session cookie is not sent to the storage host.
        """
        headers = self._browser_headers(f"{PUBLISH_ORIGIN}/")
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(len(content))
        await self._send(
            action,
            "PUT",
            url,
            content=content,
            headers=headers,
            timeout=self.upload_timeout,
        )
