"""Loader contracts exposed to callers."""

from typing import TYPE_CHECKING, Protocol

from ..models.movie import MovieRoot

if TYPE_CHECKING:
    from .remote_image_data_loader import ImageDataLoaderTask


class MovieLoader(Protocol):
    """Anything that can asynchronously produce a page of movies.

    ``load`` either returns a ``MovieRoot`` or raises, once per call.
    """

    async def load(self) -> MovieRoot: ...


class ImageDataLoader(Protocol):
    """Starts an image download and hands back a cancellable task."""

    def load_image_data(self, url: str) -> "ImageDataLoaderTask": ...
