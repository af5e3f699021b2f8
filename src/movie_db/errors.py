"""Error taxonomy shared by the loaders."""


class MovieLoaderError(Exception):
    """Base class for errors raised by movie and image loaders."""


class ConnectivityError(MovieLoaderError):
    """The transport failed before a response was obtained."""


class InvalidDataError(MovieLoaderError):
    """A response was obtained but its status or body is unusable."""


class CacheMissError(MovieLoaderError):
    """The local cache is empty or older than the validity window."""


class LoaderClosedError(MovieLoaderError):
    """An operation was requested on a loader that has been closed."""


class StoreError(Exception):
    """Raised by a movie store when a persistence operation fails."""
