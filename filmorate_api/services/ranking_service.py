"""Popularity ranking over the whole film storage."""

from __future__ import annotations

import logging
from typing import List, Optional

from filmorate_api.models.films import Film
from filmorate_api.services.repositories.base import FilmStorage

log = logging.getLogger(__name__)

DEFAULT_POPULAR_COUNT = 10


def rank_by_likes(films: List[Film], count: int) -> List[Film]:
    """Most-liked first; `sorted` is stable, so ties keep input order."""
    return sorted(films, key=lambda f: f.likes_count, reverse=True)[:count]


class RankingService:
    """Computes the N most-liked films on demand.

    Each call re-sorts every film, O(n log n) in the catalog size.
    """

    def __init__(
        self,
        films: FilmStorage,
        default_count: int = DEFAULT_POPULAR_COUNT,
    ) -> None:
        self.films = films
        self.default_count = default_count

    def effective_count(self, count: Optional[int]) -> int:
        if count is None or count <= 0:
            return self.default_count
        return count

    async def get_popular(self, count: Optional[int] = None) -> List[Film]:
        limit = self.effective_count(count)
        popular = rank_by_likes(await self.films.find_all(), limit)
        log.debug("popular_films",
                  extra={"requested": count, "returned": len(popular)})
        return popular
