"""Local persistence contract for cached movie pages."""

from datetime import datetime
from typing import Protocol

from attrs import define

from ..errors import StoreError
from ..models.local import CachedMovieRoot, LocalMovieRoot


class MovieStore(Protocol):
    """Holds at most one cached movie page. Failures are raised."""

    async def delete_cache(self) -> None: ...

    async def insert(self, root: LocalMovieRoot, timestamp: datetime) -> None: ...

    async def retrieve(self) -> CachedMovieRoot | None: ...


@define
class InMemoryMovieStore:
    """Process-lifetime ``MovieStore``.

    Inserting over an existing entry is refused, so callers must delete first.
    """

    _cache: CachedMovieRoot | None = None

    async def delete_cache(self) -> None:
        self._cache = None

    async def insert(self, root: LocalMovieRoot, timestamp: datetime) -> None:
        if self._cache is not None:
            raise StoreError("A cached movie page already exists")
        self._cache = CachedMovieRoot(root=root, timestamp=timestamp)

    async def retrieve(self) -> CachedMovieRoot | None:
        return self._cache
