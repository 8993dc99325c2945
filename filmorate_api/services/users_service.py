"""Service layer for users and the friendship state machine.

Friendship lifecycle for a pair (a, b)::

    absent --request(a, b)--> PENDING(a -> b) --confirm by b--> CONFIRMED
    PENDING / CONFIRMED --remove(a, b) or remove(b, a)--> absent

Only the target of a request may confirm it. The legacy symmetric mode
(`add_friend`) jumps straight from absent to CONFIRMED.
"""

from __future__ import annotations

import logging
from typing import List, Set

from filmorate_api.core.result import Failure, Result
from filmorate_api.models.friendship import Friendship, FriendshipStatus
from filmorate_api.models.users import User, UserIn
from filmorate_api.services.repositories.base import (
    FriendshipStorage,
    UserStorage,
)
from filmorate_api.services.validation import (
    normalize_user_name,
    validate_user,
)

log = logging.getLogger(__name__)


def user_not_found(user_id: int) -> Failure:
    return Failure.not_found(f"user id={user_id} not found", "id")


class UsersService:
    """Users CRUD gated by validation, plus friendships."""

    def __init__(
        self,
        users: UserStorage,
        friendships: FriendshipStorage,
        auto_confirm: bool = False,
    ) -> None:
        self.users = users
        self.friendships = friendships
        self.auto_confirm = auto_confirm

    # ---------- USERS ----------

    def _build(self, payload: UserIn, user_id: int = 0) -> User:
        return User(
            id=user_id,
            email=payload.email,
            login=payload.login,
            name=normalize_user_name(payload),
            birthday=payload.birthday,
        )

    async def find_all(self) -> List[User]:
        return await self.users.find_all()

    async def get_by_id(self, user_id: int) -> Result[User]:
        user = await self.users.find_by_id(user_id)
        if user is None:
            return user_not_found(user_id)
        return user

    async def create(self, payload: UserIn) -> Result[User]:
        failure = validate_user(payload)
        if failure is not None:
            log.warning("user_rejected", extra={
                "field": failure.field, "reason": failure.message})
            return failure
        user = await self.users.create(self._build(payload))
        log.info("user_created", extra={"user_id": user.id})
        return user

    async def update(self, payload: UserIn) -> Result[User]:
        failure = validate_user(payload)
        if failure is not None:
            log.warning("user_rejected", extra={
                "user_id": payload.id,
                "field": failure.field,
                "reason": failure.message,
            })
            return failure
        if payload.id is None:
            return Failure.validation("user id is required", "id")
        updated = await self.users.update(self._build(payload, payload.id))
        if updated is None:
            return user_not_found(payload.id)
        log.info("user_updated", extra={"user_id": updated.id})
        return updated

    async def clear(self) -> None:
        await self.friendships.clear()
        await self.users.clear()

    # ---------- FRIENDSHIPS ----------

    async def _check_pair(self, user_id: int,
                          friend_id: int) -> Failure | None:
        for uid in (user_id, friend_id):
            if not await self.users.exists_by_id(uid):
                return user_not_found(uid)
        if user_id == friend_id:
            return Failure.validation("user cannot befriend themselves",
                                      "friendId")
        return None

    async def request_friendship(self, user_id: int,
                                 friend_id: int) -> Result[Friendship]:
        """Send a request; an existing record for the pair is returned as is."""
        failure = await self._check_pair(user_id, friend_id)
        if failure is not None:
            return failure
        record = await self.friendships.create_request(user_id, friend_id)
        log.info("friendship_requested", extra={
            "user_id": user_id,
            "friend_id": friend_id,
            "status": record.status.value,
        })
        return record

    async def add_friend(self, user_id: int,
                         friend_id: int) -> Result[Friendship]:
        """Legacy symmetric mode: both users become friends at once."""
        failure = await self._check_pair(user_id, friend_id)
        if failure is not None:
            return failure
        record = await self.friendships.create_confirmed(user_id, friend_id)
        log.info("friendship_added",
                 extra={"user_id": user_id, "friend_id": friend_id})
        return record

    async def befriend(self, user_id: int,
                       friend_id: int) -> Result[Friendship]:
        if self.auto_confirm:
            return await self.add_friend(user_id, friend_id)
        return await self.request_friendship(user_id, friend_id)

    async def confirm_friendship(self, user_id: int,
                                 friend_id: int) -> Result[Friendship]:
        """`user_id` accepts the pending request sent by `friend_id`."""
        failure = await self._check_pair(user_id, friend_id)
        if failure is not None:
            return failure
        record = await self.friendships.confirm(friend_id, user_id)
        if record is None:
            return Failure.conflict(
                f"no pending friend request from user id={friend_id} "
                f"to user id={user_id}",
                "friendId",
            )
        log.info("friendship_confirmed",
                 extra={"user_id": user_id, "friend_id": friend_id})
        return record

    async def remove_friendship(self, user_id: int,
                                friend_id: int) -> Result[bool]:
        """Drop the pair's record in either direction; absent is a no-op."""
        failure = await self._check_pair(user_id, friend_id)
        if failure is not None:
            return failure
        removed = await self.friendships.delete(user_id, friend_id)
        if removed:
            log.info("friendship_removed",
                     extra={"user_id": user_id, "friend_id": friend_id})
        return removed

    async def _confirmed_ids(self, user_id: int) -> Set[int]:
        return {
            r.counterpart(user_id)
            for r in await self.friendships.list_for_user(user_id)
            if r.status == FriendshipStatus.CONFIRMED
        }

    async def get_friends(self, user_id: int) -> Result[Set[int]]:
        """Ids of confirmed friends, as a fresh set."""
        if not await self.users.exists_by_id(user_id):
            return user_not_found(user_id)
        return await self._confirmed_ids(user_id)

    async def get_common_friends(self, user_id: int,
                                 other_id: int) -> Result[Set[int]]:
        for uid in (user_id, other_id):
            if not await self.users.exists_by_id(uid):
                return user_not_found(uid)
        common = (await self._confirmed_ids(user_id)
                  & await self._confirmed_ids(other_id))
        return common - {user_id, other_id}

    async def get_friendship_statuses(
            self, user_id: int) -> Result[List[Friendship]]:
        if not await self.users.exists_by_id(user_id):
            return user_not_found(user_id)
        return await self.friendships.list_for_user(user_id)

    async def resolve(self, user_ids: Set[int]) -> List[User]:
        """Users for the given ids, ordered by id."""
        return await self.users.find_by_ids(sorted(user_ids))
