"""Cache-backed movie loader."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

from attrs import define, field

from ..errors import CacheMissError, LoaderClosedError
from ..models.local import LocalMovieRoot
from ..models.movie import MovieRoot
from .movie_store import MovieStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_CACHE_AGE = timedelta(days=7)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@define
class LocalMovieLoader:
    """Writes movie pages to a ``MovieStore`` and reads them back while fresh.

    A cached page is valid while ``current_date() < timestamp + max_cache_age``.
    ``close()`` cancels any store operation still outstanding; the pending
    ``save``/``load`` is dropped rather than finished.
    """

    store: MovieStore
    current_date: Callable[[], datetime] = utc_now
    max_cache_age: timedelta = DEFAULT_MAX_CACHE_AGE
    _pending: set[asyncio.Task] = field(factory=set, init=False)
    _closed: bool = field(default=False, init=False)

    async def save(self, movie_root: MovieRoot) -> None:
        """Replace the cached page with ``movie_root``.

        The old entry is deleted first; if that fails the error is raised and
        nothing is inserted. The timestamp is taken when the insert is issued.
        """
        await self._run(self._save(movie_root))

    async def load(self) -> MovieRoot:
        """Return the cached page, or raise ``CacheMissError`` if none is fresh."""
        return await self._run(self._load())

    async def validate_cache(self) -> None:
        """Delete the cached page if it has expired or cannot be read."""
        await self._run(self._validate_cache())

    async def close(self) -> None:
        self._closed = True
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            logger.debug("Dropped %d pending cache operation(s)", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)

    async def _save(self, movie_root: MovieRoot) -> None:
        await self.store.delete_cache()
        await self.store.insert(
            LocalMovieRoot.from_movie_root(movie_root), self.current_date()
        )

    async def _load(self) -> MovieRoot:
        cached = await self.store.retrieve()
        if cached is None:
            logger.debug("Movie cache is empty")
            raise CacheMissError("No cached movies")
        if not self._is_valid(cached.timestamp):
            logger.debug("Movie cache from %s has expired", cached.timestamp)
            raise CacheMissError(f"Cached movies from {cached.timestamp} have expired")
        return cached.root.to_movie_root()

    async def _validate_cache(self) -> None:
        try:
            cached = await self.store.retrieve()
        except Exception:
            logger.warning("Could not read movie cache, deleting it", exc_info=True)
            await self.store.delete_cache()
            return
        if cached is not None and not self._is_valid(cached.timestamp):
            logger.info("Deleting expired movie cache from %s", cached.timestamp)
            await self.store.delete_cache()

    def _is_valid(self, timestamp: datetime) -> bool:
        return self.current_date() < timestamp + self.max_cache_age

    async def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self._closed:
            coro.close()
            raise LoaderClosedError("LocalMovieLoader has been closed")
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return await task
