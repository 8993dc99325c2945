"""Storage contracts shared by the in-memory and Mongo backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Set

from filmorate_api.models.films import Film
from filmorate_api.models.friendship import Friendship
from filmorate_api.models.users import User


class FilmStorage(Protocol):
    async def find_all(self) -> List[Film]: ...

    async def create(self, film: Film) -> Film:
        """Assign the next id and store the film; the input id is ignored."""

    async def update(self, film: Film) -> Optional[Film]:
        """Replace the stored film; None when the id is unknown."""

    async def find_by_id(self, film_id: int) -> Optional[Film]: ...

    async def exists_by_id(self, film_id: int) -> bool: ...

    async def clear(self) -> None: ...

    async def add_like(self, film_id: int, user_id: int) -> bool:
        """Insert into the like-set; True when it was not there yet."""

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        """Remove from the like-set; True when it was there."""

    async def get_likes(self, film_id: int) -> Set[int]: ...


class UserStorage(Protocol):
    async def find_all(self) -> List[User]: ...

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> Optional[User]: ...

    async def find_by_id(self, user_id: int) -> Optional[User]: ...

    async def find_by_ids(self, user_ids: List[int]) -> List[User]: ...

    async def exists_by_id(self, user_id: int) -> bool: ...

    async def clear(self) -> None: ...


class FriendshipStorage(Protocol):
    """One record per unordered pair of users."""

    async def get(self, a: int, b: int) -> Optional[Friendship]:
        """Record for the pair in either direction."""

    async def create_request(self, user_id: int,
                             friend_id: int) -> Friendship:
        """Insert a PENDING record unless the pair already has one.

        Returns the record stored for the pair after the call.
        """

    async def create_confirmed(self, user_id: int,
                               friend_id: int) -> Friendship:
        """Insert a CONFIRMED record, or confirm the existing one."""

    async def confirm(self, requester_id: int,
                      target_id: int) -> Optional[Friendship]:
        """PENDING requester->target becomes CONFIRMED.

        None when no such pending request exists.
        """

    async def delete(self, a: int, b: int) -> bool: ...

    async def list_for_user(self, user_id: int) -> List[Friendship]: ...

    async def clear(self) -> None: ...


@dataclass
class Storage:
    """Repositories of one backend plus its shutdown hook."""
    films: FilmStorage
    users: UserStorage
    friendships: FriendshipStorage
    close: Callable[[], None] = lambda: None


def pair_key(a: int, b: int) -> str:
    """Canonical key of an unordered pair: smaller id first."""
    lo, hi = sorted((a, b))
    return f"{lo}:{hi}"
