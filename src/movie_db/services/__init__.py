"""Loaders and the collaborators they talk to."""

from .caching_movie_loader import CachingMovieLoader
from .http_client import HTTPClient, HTTPResponse, HttpxHTTPClient
from .loader import ImageDataLoader, MovieLoader
from .local_movie_loader import LocalMovieLoader
from .movie_store import InMemoryMovieStore, MovieStore
from .remote_image_data_loader import ImageDataLoaderTask, RemoteImageDataLoader
from .remote_movie_loader import RemoteMovieLoader

__all__ = [
    "CachingMovieLoader",
    "HTTPClient",
    "HTTPResponse",
    "HttpxHTTPClient",
    "ImageDataLoader",
    "ImageDataLoaderTask",
    "InMemoryMovieStore",
    "LocalMovieLoader",
    "MovieLoader",
    "MovieStore",
    "RemoteImageDataLoader",
    "RemoteMovieLoader",
]
