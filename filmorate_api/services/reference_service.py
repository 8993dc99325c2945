"""Read-only catalogs of genres and MPA ratings."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from filmorate_api.models.reference import Genre, Mpa

log = logging.getLogger(__name__)

GENRES = (
    Genre(id=1, name="Комедия"),
    Genre(id=2, name="Драма"),
    Genre(id=3, name="Мультфильм"),
    Genre(id=4, name="Триллер"),
    Genre(id=5, name="Документальный"),
    Genre(id=6, name="Боевик"),
)

MPA_RATINGS = (
    Mpa(id=1, name="G",
        description="у фильма нет возрастных ограничений"),
    Mpa(id=2, name="PG",
        description="детям рекомендуется смотреть фильм с родителями"),
    Mpa(id=3, name="PG-13",
        description="детям до 13 лет просмотр не желателен"),
    Mpa(id=4, name="R",
        description="лицам до 17 лет просматривать фильм можно "
                    "только в присутствии взрослого"),
    Mpa(id=5, name="NC-17",
        description="лицам до 18 лет просмотр запрещён"),
)


class ReferenceData:
    """Genre and MPA lookups over catalogs fixed at construction time."""

    def __init__(
        self,
        genres: Iterable[Genre] = GENRES,
        mpa: Iterable[Mpa] = MPA_RATINGS,
    ) -> None:
        self._genres: Dict[int, Genre] = {g.id: g for g in genres}
        self._mpa: Dict[int, Mpa] = {m.id: m for m in mpa}
        log.info(
            "reference_data_loaded",
            extra={"genres": len(self._genres), "mpa": len(self._mpa)},
        )

    def find_genre(self, genre_id: int) -> Optional[Genre]:
        genre = self._genres.get(genre_id)
        return None if genre is None else genre.model_copy()

    def find_mpa(self, mpa_id: int) -> Optional[Mpa]:
        mpa = self._mpa.get(mpa_id)
        return None if mpa is None else mpa.model_copy()

    def exists_genre(self, genre_id: int) -> bool:
        return genre_id in self._genres

    def exists_mpa(self, mpa_id: int) -> bool:
        return mpa_id in self._mpa

    def list_genres(self) -> List[Genre]:
        return [self._genres[k].model_copy() for k in sorted(self._genres)]

    def list_mpa(self) -> List[Mpa]:
        return [self._mpa[k].model_copy() for k in sorted(self._mpa)]
