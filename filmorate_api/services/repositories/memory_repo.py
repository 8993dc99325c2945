"""In-memory repositories: dict per entity guarded by an asyncio.Lock."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from filmorate_api.models.films import Film
from filmorate_api.models.friendship import Friendship, FriendshipStatus
from filmorate_api.models.users import User
from filmorate_api.services.repositories.base import Storage, pair_key

log = logging.getLogger(__name__)


class _IdSequence:
    """Id counter; callers hold the lock of the map it indexes."""

    def __init__(self) -> None:
        self._next = 1

    def issue(self) -> int:
        value = self._next
        self._next += 1
        return value

    def reset(self) -> None:
        self._next = 1


class InMemoryFilmRepo:
    def __init__(self) -> None:
        self._films: Dict[int, Film] = {}
        self._likes: Dict[int, Set[int]] = {}
        self._ids = _IdSequence()
        self._lock = asyncio.Lock()

    def _snapshot(self, film: Film) -> Film:
        likes = sorted(self._likes.get(film.id, ()))
        return film.model_copy(update={"likes": likes}, deep=True)

    async def find_all(self) -> List[Film]:
        async with self._lock:
            # dict хранит порядок вставки — на нём держится стабильный топ
            return [self._snapshot(f) for f in self._films.values()]

    async def create(self, film: Film) -> Film:
        async with self._lock:
            film_id = self._ids.issue()
            stored = film.model_copy(update={"id": film_id, "likes": []},
                                     deep=True)
            self._films[film_id] = stored
            self._likes[film_id] = set(film.likes)
            log.info("film_stored", extra={"film_id": film_id})
            return self._snapshot(stored)

    async def update(self, film: Film) -> Optional[Film]:
        async with self._lock:
            if film.id not in self._films:
                return None
            stored = film.model_copy(update={"likes": []}, deep=True)
            self._films[film.id] = stored
            return self._snapshot(stored)

    async def find_by_id(self, film_id: int) -> Optional[Film]:
        async with self._lock:
            film = self._films.get(film_id)
            return None if film is None else self._snapshot(film)

    async def exists_by_id(self, film_id: int) -> bool:
        return film_id in self._films

    async def clear(self) -> None:
        async with self._lock:
            self._films.clear()
            self._likes.clear()
            self._ids.reset()
            log.info("films_cleared")

    async def add_like(self, film_id: int, user_id: int) -> bool:
        async with self._lock:
            likes = self._likes.setdefault(film_id, set())
            if user_id in likes:
                return False
            likes.add(user_id)
            return True

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        async with self._lock:
            likes = self._likes.get(film_id, set())
            if user_id not in likes:
                return False
            likes.discard(user_id)
            return True

    async def get_likes(self, film_id: int) -> Set[int]:
        async with self._lock:
            return set(self._likes.get(film_id, ()))


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._ids = _IdSequence()
        self._lock = asyncio.Lock()

    async def find_all(self) -> List[User]:
        async with self._lock:
            return [u.model_copy() for u in self._users.values()]

    async def create(self, user: User) -> User:
        async with self._lock:
            user_id = self._ids.issue()
            stored = user.model_copy(update={"id": user_id})
            self._users[user_id] = stored
            log.info("user_stored", extra={"user_id": user_id})
            return stored.model_copy()

    async def update(self, user: User) -> Optional[User]:
        async with self._lock:
            if user.id not in self._users:
                return None
            self._users[user.id] = user.model_copy()
            return user.model_copy()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        async with self._lock:
            user = self._users.get(user_id)
            return None if user is None else user.model_copy()

    async def find_by_ids(self, user_ids: List[int]) -> List[User]:
        async with self._lock:
            return [self._users[i].model_copy()
                    for i in user_ids if i in self._users]

    async def exists_by_id(self, user_id: int) -> bool:
        return user_id in self._users

    async def clear(self) -> None:
        async with self._lock:
            self._users.clear()
            self._ids.reset()
            log.info("users_cleared")


class InMemoryFriendshipRepo:
    def __init__(self) -> None:
        self._pairs: Dict[str, Friendship] = {}
        self._lock = asyncio.Lock()

    async def get(self, a: int, b: int) -> Optional[Friendship]:
        async with self._lock:
            record = self._pairs.get(pair_key(a, b))
            return None if record is None else record.model_copy()

    async def create_request(self, user_id: int,
                             friend_id: int) -> Friendship:
        async with self._lock:
            key = pair_key(user_id, friend_id)
            record = self._pairs.get(key)
            if record is None:
                record = Friendship(
                    user_id=user_id,
                    friend_id=friend_id,
                    status=FriendshipStatus.PENDING,
                    created_at=datetime.now(timezone.utc),
                )
                self._pairs[key] = record
            return record.model_copy()

    async def create_confirmed(self, user_id: int,
                               friend_id: int) -> Friendship:
        async with self._lock:
            key = pair_key(user_id, friend_id)
            record = self._pairs.get(key)
            if record is None:
                record = Friendship(
                    user_id=user_id,
                    friend_id=friend_id,
                    status=FriendshipStatus.CONFIRMED,
                    created_at=datetime.now(timezone.utc),
                )
            else:
                record = record.model_copy(
                    update={"status": FriendshipStatus.CONFIRMED})
            self._pairs[key] = record
            return record.model_copy()

    async def confirm(self, requester_id: int,
                      target_id: int) -> Optional[Friendship]:
        async with self._lock:
            key = pair_key(requester_id, target_id)
            record = self._pairs.get(key)
            if (record is None
                    or record.status != FriendshipStatus.PENDING
                    or record.user_id != requester_id):
                return None
            record = record.model_copy(
                update={"status": FriendshipStatus.CONFIRMED})
            self._pairs[key] = record
            return record.model_copy()

    async def delete(self, a: int, b: int) -> bool:
        async with self._lock:
            return self._pairs.pop(pair_key(a, b), None) is not None

    async def list_for_user(self, user_id: int) -> List[Friendship]:
        async with self._lock:
            return [r.model_copy() for r in self._pairs.values()
                    if r.involves(user_id)]

    async def clear(self) -> None:
        async with self._lock:
            self._pairs.clear()


def build_memory_storage() -> Storage:
    return Storage(
        films=InMemoryFilmRepo(),
        users=InMemoryUserRepo(),
        friendships=InMemoryFriendshipRepo(),
    )
