"""Shared test doubles."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from attrs import define, field

from movie_db.models.local import CachedMovieRoot, LocalMovieRoot
from movie_db.models.movie import Movie, MovieRoot
from movie_db.services.http_client import HTTPResponse


async def run_pending(rounds: int = 5) -> None:
    """Let scheduled tasks run until they block on their next await."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@define
class HTTPClientSpy:
    """HTTPClient whose requests stay pending until a test resolves them by index."""

    requests: list[tuple[str, asyncio.Future]] = field(factory=list)
    cancelled_urls: list[str] = field(factory=list)

    @property
    def requested_urls(self) -> list[str]:
        return [url for url, _ in self.requests]

    async def get(self, url: str) -> HTTPResponse:
        future = asyncio.get_running_loop().create_future()
        self.requests.append((url, future))
        try:
            return await future
        except asyncio.CancelledError:
            self.cancelled_urls.append(url)
            raise

    def complete(self, status_code: int = 200, data: bytes = b"", at: int = 0) -> None:
        future = self.requests[at][1]
        if not future.done():
            future.set_result(HTTPResponse(data=data, status_code=status_code))

    def fail(self, error: Exception | None = None, at: int = 0) -> None:
        future = self.requests[at][1]
        if not future.done():
            future.set_exception(error or ConnectionError("connection refused"))


@define
class MovieStoreSpy:
    """MovieStore that records messages and waits for the test to finish each one."""

    messages: list[tuple] = field(factory=list)
    _deletions: list[asyncio.Future] = field(factory=list)
    _insertions: list[asyncio.Future] = field(factory=list)
    _retrievals: list[asyncio.Future] = field(factory=list)

    async def delete_cache(self) -> None:
        self.messages.append(("delete",))
        await self._pending(self._deletions)

    async def insert(self, root: LocalMovieRoot, timestamp: datetime) -> None:
        self.messages.append(("insert", root, timestamp))
        await self._pending(self._insertions)

    async def retrieve(self) -> CachedMovieRoot | None:
        self.messages.append(("retrieve",))
        return await self._pending(self._retrievals)

    async def _pending(self, futures: list[asyncio.Future]):
        future = asyncio.get_running_loop().create_future()
        futures.append(future)
        return await future

    def complete_deletion(self, error: Exception | None = None, at: int = 0) -> None:
        self._resolve(self._deletions[at], None, error)

    def complete_insertion(self, error: Exception | None = None, at: int = 0) -> None:
        self._resolve(self._insertions[at], None, error)

    def complete_retrieval(
        self, cached: CachedMovieRoot | None = None, error: Exception | None = None, at: int = 0
    ) -> None:
        self._resolve(self._retrievals[at], cached, error)

    @staticmethod
    def _resolve(future: asyncio.Future, value, error: Exception | None) -> None:
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(value)


def make_movie(id: int = 1, **overrides) -> Movie:
    values = dict(
        id=id,
        title=f"Movie {id}",
        genre_ids=[28, 12],
        popularity=1234.567,
        vote_count=4200,
        vote_average=7.3,
        poster_path=f"/poster{id}.jpg",
        overview="An overview.",
        release_date="2022-05-03",
    )
    values.update(overrides)
    return Movie(**values)


def make_movie_json(id: int = 1, **overrides) -> dict:
    values = {
        "poster_path": f"/poster{id}.jpg",
        "overview": "An overview.",
        "release_date": "2022-05-03",
        "genre_ids": [28, 12],
        "id": id,
        "title": f"Movie {id}",
        "popularity": 1234.567,
        "vote_count": 4200,
        "vote_average": 7.3,
    }
    values.update(overrides)
    return values


@pytest.fixture
def http_client() -> HTTPClientSpy:
    return HTTPClientSpy()


@pytest.fixture
def store() -> MovieStoreSpy:
    return MovieStoreSpy()


@pytest.fixture
def movie_root() -> MovieRoot:
    return MovieRoot(page=1, results=[make_movie(1), make_movie(2, poster_path=None)])


@pytest.fixture
def now() -> datetime:
    return datetime(2022, 5, 9, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def max_age() -> timedelta:
    return timedelta(days=7)
