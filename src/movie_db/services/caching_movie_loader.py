"""Cache-aside composition of a remote and a local movie loader."""

import logging

from attrs import define

from ..errors import CacheMissError
from ..models.movie import MovieRoot
from .local_movie_loader import LocalMovieLoader
from .loader import MovieLoader

logger = logging.getLogger(__name__)


@define
class CachingMovieLoader:
    """Serves from the local cache, falling back to (and refilling from) remote."""

    remote: MovieLoader
    local: LocalMovieLoader

    async def load(self) -> MovieRoot:
        try:
            return await self.local.load()
        except CacheMissError:
            logger.debug("Cache miss, loading from remote")
        except Exception:
            logger.warning("Reading the movie cache failed, loading from remote", exc_info=True)

        root = await self.remote.load()

        try:
            await self.local.save(root)
        except Exception:
            logger.warning("Could not cache movie page %d", root.page, exc_info=True)
        return root
