"""Domain rules for films and users.

Every check returns the first violated rule as a :class:`Failure`, or
``None`` when the value is acceptable. The order of checks is fixed so the
same payload always yields the same message.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from filmorate_api.core.result import Failure
from filmorate_api.models.films import FilmIn
from filmorate_api.models.users import UserIn
from filmorate_api.services.reference_service import ReferenceData

FIRST_FILM_DATE = date(1895, 12, 28)
MAX_DESCRIPTION_LENGTH = 200


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_film(film: FilmIn) -> Optional[Failure]:
    if _is_blank(film.name):
        return Failure.validation("film name must not be blank", "name")
    if (film.description is not None
            and len(film.description) > MAX_DESCRIPTION_LENGTH):
        return Failure.validation(
            f"description must be at most {MAX_DESCRIPTION_LENGTH} "
            "characters",
            "description",
        )
    if film.release_date is None:
        return Failure.validation("release date is required", "releaseDate")
    if film.release_date < FIRST_FILM_DATE:
        return Failure.validation(
            f"release date before {FIRST_FILM_DATE.isoformat()}",
            "releaseDate",
        )
    if film.duration is None or film.duration <= 0:
        return Failure.validation("duration must be positive", "duration")
    return None


def validate_film_references(
    film: FilmIn,
    reference: ReferenceData,
) -> Optional[Failure]:
    """Every referenced genre and the MPA rating must exist."""
    if film.mpa is not None and not reference.exists_mpa(film.mpa.id):
        return Failure.not_found(f"mpa id={film.mpa.id} not found", "mpa")
    for genre in film.genres:
        if not reference.exists_genre(genre.id):
            return Failure.not_found(f"genre id={genre.id} not found",
                                     "genres")
    return None


def validate_user(
    user: UserIn,
    today: Optional[date] = None,
) -> Optional[Failure]:
    today = today or date.today()
    if _is_blank(user.email) or "@" not in user.email:
        return Failure.validation(
            "email must not be blank and must contain '@'", "email")
    if _is_blank(user.login) or any(ch.isspace() for ch in user.login):
        return Failure.validation(
            "login must not be blank or contain spaces", "login")
    if user.birthday is None:
        return Failure.validation("birthday is required", "birthday")
    if user.birthday > today:
        return Failure.validation("birthday must not be in the future",
                                  "birthday")
    return None


def normalize_user_name(user: UserIn) -> str:
    """Display name: the login stands in for a blank name."""
    return user.login if _is_blank(user.name) else user.name


def unique_ids(ids: List[int]) -> List[int]:
    # жанры — множество: дубли выкидываем, порядок по id
    return sorted(set(ids))
