"""HTTP transport used by the remote loaders."""

import logging
from typing import Protocol

import httpx
from attrs import define, frozen

logger = logging.getLogger(__name__)


@frozen
class HTTPResponse:
    """Raw body and status code of a completed GET."""

    data: bytes
    status_code: int


class HTTPClient(Protocol):
    """Performs a single GET.

    Transport failures are raised. A request in flight is cancelled by
    cancelling the asyncio task awaiting it.
    """

    async def get(self, url: str) -> HTTPResponse: ...


@define
class HttpxHTTPClient:
    """``HTTPClient`` backed by ``httpx.AsyncClient``.

    Non-2xx responses are returned as-is; interpreting the status is the
    loaders' job.
    """

    timeout: float = 30.0
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str) -> HTTPResponse:
        client = await self._get_client()
        logger.debug("GET %s", url)
        resp = await client.get(url)
        logger.debug("GET %s -> %d (%d bytes)", url, resp.status_code, len(resp.content))
        return HTTPResponse(data=resp.content, status_code=resp.status_code)
