"""MCP server exposing the movie and poster loaders."""

import asyncio
import base64
import json
import logging
import sys

import attrs
from attrs import define, field
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import ImageContent, TextContent, Tool

from ..config import Settings, get_settings
from ..models.movie import MovieRoot
from ..services.caching_movie_loader import CachingMovieLoader
from ..services.http_client import HTTPClient, HttpxHTTPClient
from ..services.local_movie_loader import LocalMovieLoader
from ..services.movie_store import InMemoryMovieStore
from ..services.remote_image_data_loader import RemoteImageDataLoader
from ..services.remote_movie_loader import RemoteMovieLoader

logger = logging.getLogger(__name__)


def movie_root_to_dict(root: MovieRoot) -> dict:
    """Plain JSON-ready representation of a movie page."""
    return attrs.asdict(root)


def detect_image_type(data: bytes) -> str:
    """Guess an image MIME type from its magic bytes (JPEG if unknown)."""
    if data[:2] == b"\xff\xd8":
        return "image/jpeg"
    if data[:4] == b"\x89PNG":
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:4] == b"GIF8":
        return "image/gif"
    return "image/jpeg"


def _check_page(page) -> None:
    if isinstance(page, bool) or not isinstance(page, int):
        raise TypeError(f"page must be an integer, got {page!r}")
    if page < 1:
        raise ValueError(f"page must be 1 or greater, got {page}")


@define
class MovieCatalog:
    """Wires loaders per page: one cache-aside loader and store for each page."""

    settings: Settings
    client: HTTPClient
    max_pages: int = 50
    _loaders: dict[int, CachingMovieLoader] = field(factory=dict, init=False)

    def loader_for(self, page: int) -> CachingMovieLoader:
        _check_page(page)
        if page not in self._loaders:
            if len(self._loaders) >= self.max_pages:
                evicted = next(iter(self._loaders))
                del self._loaders[evicted]
                logger.debug("Evicted cached page %d", evicted)
            self._loaders[page] = CachingMovieLoader(
                remote=RemoteMovieLoader(
                    url=self.settings.movies_url(page), client=self.client
                ),
                local=LocalMovieLoader(
                    store=InMemoryMovieStore(),
                    max_cache_age=self.settings.cache_max_age,
                ),
            )
        return self._loaders[page]

    async def load_movies(self, page: int = 1) -> MovieRoot:
        return await self.loader_for(page).load()

    async def load_poster(self, poster_path: str) -> bytes:
        images = RemoteImageDataLoader(client=self.client)
        return await images.load_image_data(self.settings.poster_url(poster_path))

    async def clear_cache(self, page: int | None = None) -> list[int]:
        """Delete cached pages (all of them when ``page`` is None)."""
        if page is not None:
            _check_page(page)
        pages = [page] if page is not None else sorted(self._loaders)
        cleared = []
        for p in pages:
            loader = self._loaders.get(p)
            if loader is None:
                continue
            await loader.local.store.delete_cache()
            cleared.append(p)
        return cleared

    async def prune_expired(self) -> None:
        for loader in self._loaders.values():
            await loader.local.validate_cache()


def create_mcp_server() -> Server:
    """Create and configure the MCP server."""
    server = Server("movie-db")
    settings = get_settings()

    http_client = HttpxHTTPClient(timeout=settings.request_timeout)
    catalog = MovieCatalog(settings=settings, client=http_client)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="load_movies",
                description="Load a page of movies. Served from the local cache while it is fresh, otherwise fetched and cached.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "page": {
                            "type": "integer",
                            "description": "Page number (default 1)",
                        },
                    },
                },
            ),
            Tool(
                name="load_poster",
                description="Download a movie poster image",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "poster_path": {
                            "type": "string",
                            "description": "Poster path as returned in a movie's poster_path",
                        },
                    },
                    "required": ["poster_path"],
                },
            ),
            Tool(
                name="clear_cache",
                description="Delete cached movie pages and prune expired ones",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "page": {
                            "type": "integer",
                            "description": "Only clear this page (default: all pages)",
                        },
                    },
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent | ImageContent]:
        try:
            if name == "load_movies":
                root = await catalog.load_movies(arguments.get("page", 1))
                return [
                    TextContent(
                        type="text",
                        text=json.dumps(movie_root_to_dict(root), indent=2),
                    )
                ]

            elif name == "load_poster":
                data = await catalog.load_poster(arguments["poster_path"])
                return [
                    ImageContent(
                        type="image",
                        data=base64.b64encode(data).decode("ascii"),
                        mimeType=detect_image_type(data),
                    )
                ]

            elif name == "clear_cache":
                cleared = await catalog.clear_cache(arguments.get("page"))
                await catalog.prune_expired()
                return [
                    TextContent(type="text", text=json.dumps({"cleared_pages": cleared}))
                ]

            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]

        except Exception as e:
            logger.exception("Tool %s failed", name)
            return [TextContent(type="text", text=f"Error: {type(e).__name__}: {e}")]

    return server


async def main():
    """Run the MCP server."""
    logging.basicConfig(
        level=get_settings().log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
