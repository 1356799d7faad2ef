"""Initial application state handed to the client for hydration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from video_gateway.auth import Identity
from video_gateway.backend import BackendClient, BackendError, BackendUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

CatalogItem = dict[str, Any]

TRENDS_RATING = "PG"
ORIGINALS_RATING = "G"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of an upstream fetch: a value or the error that prevented it."""

    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> FetchResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        if self.error is not None or self.value is None:
            return default
        return self.value


@dataclass
class InitialState:
    user: dict[str, Any] = field(default_factory=dict)
    my_list: list[CatalogItem] = field(default_factory=list)
    trends: list[CatalogItem] = field(default_factory=list)
    originals: list[CatalogItem] = field(default_factory=list)

    @property
    def logged(self) -> bool:
        return bool(self.user.get("id"))

    def find_movie(self, movie_id: str) -> CatalogItem | None:
        for movie in (*self.trends, *self.originals):
            if str(movie.get("_id")) == movie_id:
                return movie
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user,
            "myList": self.my_list,
            "trends": self.trends,
            "originals": self.originals,
        }


def partition_catalog(
    movies: list[CatalogItem],
) -> tuple[list[CatalogItem], list[CatalogItem]]:
    """Split the catalog into (trends, originals); anything else is dropped."""

    trends: list[CatalogItem] = []
    originals: list[CatalogItem] = []
    for movie in movies:
        if not isinstance(movie, dict) or not movie.get("_id"):
            continue
        rating = movie.get("contentRating")
        if rating == TRENDS_RATING:
            trends.append(movie)
        elif rating == ORIGINALS_RATING:
            originals.append(movie)
    return trends, originals


async def fetch_catalog(backend: BackendClient, token: str | None) -> FetchResult[list]:
    """Fetch the movie catalog; never raises."""

    try:
        movies = await backend.list_movies(token)
    except (BackendError, BackendUnavailable) as exc:
        logger.warning("Catalog fetch failed, rendering empty state: %s", exc)
        return FetchResult.failure(exc)
    return FetchResult.success(movies)


def build_initial_state(identity: Identity, catalog: FetchResult[list]) -> InitialState:
    if not catalog.ok:
        return InitialState()

    trends, originals = partition_catalog(catalog.unwrap_or([]))
    return InitialState(user=identity.as_user(), trends=trends, originals=originals)
