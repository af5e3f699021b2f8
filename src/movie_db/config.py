"""Configuration management using environment variables."""

import os
from datetime import timedelta
from functools import lru_cache

import httpx
from attrs import define


@define
class Settings:
    """Application settings."""

    movies_api_url: str
    image_base_url: str = "https://image.tmdb.org/t/p/w500"
    cache_max_age: timedelta = timedelta(days=7)
    request_timeout: float = 30.0
    log_level: str = "INFO"

    def movies_url(self, page: int = 1) -> str:
        """Movie list URL with ``page`` passed through as a query parameter."""
        return str(httpx.URL(self.movies_api_url).copy_merge_params({"page": page}))

    def poster_url(self, poster_path: str) -> str:
        return f"{self.image_base_url.rstrip('/')}/{poster_path.lstrip('/')}"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings(
        movies_api_url=os.environ["MOVIEDB_API_URL"],
        image_base_url=os.environ.get(
            "MOVIEDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/w500"
        ),
        cache_max_age=timedelta(
            days=float(os.environ.get("MOVIEDB_CACHE_MAX_AGE_DAYS", "7"))
        ),
        request_timeout=float(os.environ.get("MOVIEDB_REQUEST_TIMEOUT", "30.0")),
        log_level=os.environ.get("MOVIEDB_LOG_LEVEL", "INFO").upper(),
    )
