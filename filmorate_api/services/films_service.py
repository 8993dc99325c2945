"""Service layer for films: validated CRUD and the like-set."""

from __future__ import annotations

import logging
from typing import List, Set

from filmorate_api.core.result import Failure, Result
from filmorate_api.models.films import Film, FilmIn
from filmorate_api.services.reference_service import ReferenceData
from filmorate_api.services.repositories.base import FilmStorage, UserStorage
from filmorate_api.services.validation import (
    unique_ids,
    validate_film,
    validate_film_references,
)

log = logging.getLogger(__name__)


def film_not_found(film_id: int) -> Failure:
    return Failure.not_found(f"film id={film_id} not found", "id")


def user_not_found(user_id: int) -> Failure:
    return Failure.not_found(f"user id={user_id} not found", "userId")


class FilmsService:
    """Films CRUD gated by validation, plus like/unlike."""

    def __init__(
        self,
        films: FilmStorage,
        users: UserStorage,
        reference: ReferenceData,
    ) -> None:
        self.films = films
        self.users = users
        self.reference = reference

    # ---------- helpers ----------

    def _check(self, payload: FilmIn) -> Failure | None:
        return (validate_film(payload)
                or validate_film_references(payload, self.reference))

    def _build(self, payload: FilmIn, film_id: int = 0) -> Film:
        """Resolve references; only call after `_check` passed."""
        mpa = (self.reference.find_mpa(payload.mpa.id)
               if payload.mpa is not None else None)
        genres = [self.reference.find_genre(i)
                  for i in unique_ids([g.id for g in payload.genres])]
        return Film(
            id=film_id,
            name=payload.name,
            description=payload.description,
            release_date=payload.release_date,
            duration=payload.duration,
            mpa=mpa,
            genres=genres,
        )

    # ---------- READ ----------

    async def find_all(self) -> List[Film]:
        return await self.films.find_all()

    async def get_by_id(self, film_id: int) -> Result[Film]:
        film = await self.films.find_by_id(film_id)
        if film is None:
            return film_not_found(film_id)
        return film

    # ---------- CREATE / UPDATE ----------

    async def create(self, payload: FilmIn) -> Result[Film]:
        failure = self._check(payload)
        if failure is not None:
            log.warning("film_rejected", extra={
                "field": failure.field, "reason": failure.message})
            return failure
        film = await self.films.create(self._build(payload))
        log.info("film_created", extra={"film_id": film.id})
        return film

    async def update(self, payload: FilmIn) -> Result[Film]:
        failure = self._check(payload)
        if failure is not None:
            log.warning("film_rejected", extra={
                "film_id": payload.id,
                "field": failure.field,
                "reason": failure.message,
            })
            return failure
        if payload.id is None:
            return Failure.validation("film id is required", "id")
        updated = await self.films.update(self._build(payload, payload.id))
        if updated is None:
            return film_not_found(payload.id)
        log.info("film_updated", extra={"film_id": updated.id})
        return updated

    async def clear(self) -> None:
        await self.films.clear()

    # ---------- LIKES ----------

    async def _check_pair(self, film_id: int, user_id: int) -> Failure | None:
        if not await self.films.exists_by_id(film_id):
            return film_not_found(film_id)
        if not await self.users.exists_by_id(user_id):
            return user_not_found(user_id)
        return None

    async def add_like(self, film_id: int, user_id: int) -> Result[int]:
        """Add user's like; repeating it is a no-op. Returns like count."""
        failure = await self._check_pair(film_id, user_id)
        if failure is not None:
            return failure
        if await self.films.add_like(film_id, user_id):
            log.info("like_added",
                     extra={"film_id": film_id, "user_id": user_id})
        return await self.like_count(film_id)

    async def remove_like(self, film_id: int, user_id: int) -> Result[int]:
        """Remove user's like; removing an absent one is a no-op."""
        failure = await self._check_pair(film_id, user_id)
        if failure is not None:
            return failure
        if await self.films.remove_like(film_id, user_id):
            log.info("like_removed",
                     extra={"film_id": film_id, "user_id": user_id})
        return await self.like_count(film_id)

    async def get_likes(self, film_id: int) -> Result[Set[int]]:
        if not await self.films.exists_by_id(film_id):
            return film_not_found(film_id)
        # репозиторий отдаёт новый set — вызывающий может его менять
        return await self.films.get_likes(film_id)

    async def like_count(self, film_id: int) -> Result[int]:
        likes = await self.get_likes(film_id)
        if isinstance(likes, Failure):
            return likes
        return len(likes)
