"""Movie list data models decoded from the remote API."""

import math
from typing import Any

from attrs import field, frozen
from attrs.validators import deep_iterable, instance_of, optional


def _integer(instance, attribute, value) -> None:
    # bool is an int subclass but never a valid count or id
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{attribute.name}' must be an int, got {value!r}")


def _number(instance, attribute, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{attribute.name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"'{attribute.name}' must be finite, got {value!r}")


_optional_str = optional(instance_of(str))


@frozen
class Movie:
    """Represents a single movie entry of a result page."""

    id: int = field(validator=_integer)
    title: str = field(validator=instance_of(str))
    genre_ids: tuple[int, ...] = field(
        converter=tuple, validator=deep_iterable(_integer)
    )
    popularity: float = field(validator=_number)
    vote_count: int = field(validator=_integer)
    vote_average: float = field(validator=_number)
    poster_path: str | None = field(default=None, validator=_optional_str)
    overview: str | None = field(default=None, validator=_optional_str)
    release_date: str | None = field(default=None, validator=_optional_str)

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> "Movie":
        """Build a movie from one element of the ``results`` array.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when the element
        does not have the expected shape.
        """
        if not isinstance(item, dict):
            raise TypeError(f"movie entry must be an object, got {type(item).__name__}")
        genre_ids = item["genre_ids"]
        if not isinstance(genre_ids, list):
            raise TypeError("genre_ids must be an array")

        return cls(
            id=item["id"],
            title=item["title"],
            genre_ids=genre_ids,
            popularity=item["popularity"],
            vote_count=item["vote_count"],
            vote_average=item["vote_average"],
            poster_path=item.get("poster_path"),
            overview=item.get("overview"),
            release_date=item.get("release_date"),
        )


@frozen
class MovieRoot:
    """One page of movies as returned by the list endpoint."""

    page: int = field(validator=_integer)
    results: tuple[Movie, ...] = field(
        converter=tuple, validator=deep_iterable(instance_of(Movie))
    )

    @classmethod
    def from_json(cls, data: Any) -> "MovieRoot":
        """Decode a parsed JSON document into a ``MovieRoot``."""
        if not isinstance(data, dict):
            raise TypeError(f"document must be an object, got {type(data).__name__}")
        results = data["results"]
        if not isinstance(results, list):
            raise TypeError("results must be an array")

        return cls(
            page=data["page"],
            results=[Movie.from_json(item) for item in results],
        )
