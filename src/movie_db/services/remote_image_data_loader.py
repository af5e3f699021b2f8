"""Cancellable poster/image downloads."""

import asyncio
import logging
from collections.abc import Callable, Generator
from typing import Any

from attrs import define, field

from ..errors import ConnectivityError, InvalidDataError
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


@define(eq=False)
class ImageDataLoaderTask:
    """Handle for one image download.

    Await it for the bytes, or register callbacks with ``add_done_callback``.
    Once ``cancel()`` has been called the outcome is never delivered: awaiting
    or calling ``result()`` raises ``asyncio.CancelledError`` and pending
    callbacks are dropped, even if the download had already finished.
    """

    url: str
    _task: asyncio.Task
    _cancelled: bool = field(default=False, init=False)
    _delivered: bool = field(default=False, init=False)
    _callbacks: list[Callable[["ImageDataLoaderTask"], None]] = field(
        factory=list, init=False
    )

    def __attrs_post_init__(self) -> None:
        self._task.add_done_callback(self._deliver)

    def cancel(self) -> None:
        """Stop the download and suppress its result. Safe to call repeatedly."""
        if self._cancelled:
            return
        self._cancelled = True
        self._callbacks.clear()
        if self._task.cancel():
            logger.debug("Cancelled image request %s", self.url)

    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        return self._cancelled or self._task.done()

    def result(self) -> bytes:
        if self._cancelled:
            raise asyncio.CancelledError()
        return self._task.result()

    def add_done_callback(self, fn: Callable[["ImageDataLoaderTask"], None]) -> None:
        """Call ``fn(task)`` once the download completes, unless cancelled."""
        if self._cancelled:
            return
        if self._delivered:
            self._task.get_loop().call_soon(self._run_callback, fn)
        else:
            self._callbacks.append(fn)

    def _deliver(self, task: asyncio.Task) -> None:
        if not task.cancelled():
            # marks the exception as retrieved
            task.exception()
        self._delivered = True
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            self._run_callback(fn)

    def _run_callback(self, fn: Callable[["ImageDataLoaderTask"], None]) -> None:
        if not self._cancelled:
            fn(self)

    async def _wait(self) -> bytes:
        if self._cancelled:
            raise asyncio.CancelledError()
        try:
            data = await self._task
        except Exception:
            if self._cancelled:
                raise asyncio.CancelledError() from None
            raise
        if self._cancelled:
            raise asyncio.CancelledError()
        return data

    def __await__(self) -> Generator[Any, None, bytes]:
        return self._wait().__await__()


@define
class RemoteImageDataLoader:
    """Downloads raw image bytes through an ``HTTPClient``.

    Each ``load_image_data`` call starts its own request on the running event
    loop and returns immediately with an ``ImageDataLoaderTask``.
    """

    client: HTTPClient

    def load_image_data(self, url: str) -> ImageDataLoaderTask:
        task = asyncio.get_running_loop().create_task(self._fetch(url))
        return ImageDataLoaderTask(url=url, task=task)

    async def _fetch(self, url: str) -> bytes:
        try:
            response = await self.client.get(url)
        except Exception as e:
            raise ConnectivityError(f"Request to {url} failed") from e

        if response.status_code != 200:
            logger.warning("Image %s answered %d", url, response.status_code)
            raise InvalidDataError(f"Unexpected status code {response.status_code}")
        if not response.data:
            logger.warning("Image %s returned an empty body", url)
            raise InvalidDataError("Empty image data")
        return response.data
