"""Data models for movie-db."""

from .local import CachedMovieRoot, LocalMovie, LocalMovieRoot
from .movie import Movie, MovieRoot

__all__ = ["Movie", "MovieRoot", "LocalMovie", "LocalMovieRoot", "CachedMovieRoot"]
