"""Cache-side mirror of the movie models.

These types are what a ``MovieStore`` persists. They are kept separate from
``Movie``/``MovieRoot`` so the cached shape can change without touching the
wire format.
"""

from datetime import datetime

from attrs import field, frozen

from .movie import Movie, MovieRoot


@frozen
class LocalMovie:
    """A movie as stored in the local cache."""

    id: int
    title: str
    genre_ids: tuple[int, ...] = field(converter=tuple)
    popularity: float
    vote_count: int
    vote_average: float
    poster_path: str | None = None
    overview: str | None = None
    release_date: str | None = None

    @classmethod
    def from_movie(cls, movie: Movie) -> "LocalMovie":
        return cls(
            id=movie.id,
            title=movie.title,
            genre_ids=movie.genre_ids,
            popularity=movie.popularity,
            vote_count=movie.vote_count,
            vote_average=movie.vote_average,
            poster_path=movie.poster_path,
            overview=movie.overview,
            release_date=movie.release_date,
        )

    def to_movie(self) -> Movie:
        return Movie(
            id=self.id,
            title=self.title,
            genre_ids=self.genre_ids,
            popularity=self.popularity,
            vote_count=self.vote_count,
            vote_average=self.vote_average,
            poster_path=self.poster_path,
            overview=self.overview,
            release_date=self.release_date,
        )


@frozen
class LocalMovieRoot:
    """A cached page of movies."""

    page: int
    results: tuple[LocalMovie, ...] = field(converter=tuple)

    @classmethod
    def from_movie_root(cls, root: MovieRoot) -> "LocalMovieRoot":
        return cls(
            page=root.page,
            results=[LocalMovie.from_movie(movie) for movie in root.results],
        )

    def to_movie_root(self) -> MovieRoot:
        return MovieRoot(
            page=self.page,
            results=[movie.to_movie() for movie in self.results],
        )


@frozen
class CachedMovieRoot:
    """The record a store holds: a cached page and when it was written."""

    root: LocalMovieRoot
    timestamp: datetime
