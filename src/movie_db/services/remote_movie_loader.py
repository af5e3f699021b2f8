"""Network-only movie loader."""

import json
import logging

from attrs import define

from ..errors import ConnectivityError, InvalidDataError
from ..models.movie import MovieRoot
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a valid JSON number")


@define
class RemoteMovieLoader:
    """Loads a page of movies from a fixed URL.

    Every call to ``load`` issues its own GET. Nothing is cached or retried.
    """

    url: str
    client: HTTPClient

    async def load(self) -> MovieRoot:
        try:
            response = await self.client.get(self.url)
        except Exception as e:
            raise ConnectivityError(f"Request to {self.url} failed") from e

        if not 200 <= response.status_code < 300:
            logger.warning("Movie list %s answered %d", self.url, response.status_code)
            raise InvalidDataError(f"Unexpected status code {response.status_code}")

        try:
            return MovieRoot.from_json(
                json.loads(response.data, parse_constant=_reject_constant)
            )
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            logger.warning("Movie list %s returned an undecodable body: %s", self.url, e)
            raise InvalidDataError("Response body is not a valid movie list") from e
