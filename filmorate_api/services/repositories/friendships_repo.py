"""Mongo repository for friendships: one document per unordered pair."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from filmorate_api.models.friendship import Friendship, FriendshipStatus
from filmorate_api.services.repositories.base import pair_key


def _from_doc(doc: Dict[str, Any]) -> Friendship:
    return Friendship(
        user_id=doc["user_id"],
        friend_id=doc["friend_id"],
        status=FriendshipStatus(doc["status"]),
        created_at=doc["created_at"],
    )


class FriendshipsRepo:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        # _id = "min:max", поэтому встречные заявки упираются в один документ
        self._col = db["friendships"]

    async def get(self, a: int, b: int) -> Optional[Friendship]:
        doc = await self._col.find_one({"_id": pair_key(a, b)})
        return None if doc is None else _from_doc(doc)

    async def _upsert(self, user_id: int, friend_id: int,
                      update: Dict[str, Any]) -> Friendship:
        try:
            doc = await self._col.find_one_and_update(
                {"_id": pair_key(user_id, friend_id)},
                update,
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            # параллельный upsert того же _id: документ уже создан соседом
            doc = await self._col.find_one_and_update(
                {"_id": pair_key(user_id, friend_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        return _from_doc(doc)

    async def create_request(self, user_id: int,
                             friend_id: int) -> Friendship:
        return await self._upsert(user_id, friend_id, {
            "$setOnInsert": {
                "user_id": user_id,
                "friend_id": friend_id,
                "status": FriendshipStatus.PENDING.value,
                "created_at": datetime.now(timezone.utc),
            },
        })

    async def create_confirmed(self, user_id: int,
                               friend_id: int) -> Friendship:
        return await self._upsert(user_id, friend_id, {
            "$setOnInsert": {
                "user_id": user_id,
                "friend_id": friend_id,
                "created_at": datetime.now(timezone.utc),
            },
            "$set": {"status": FriendshipStatus.CONFIRMED.value},
        })

    async def confirm(self, requester_id: int,
                      target_id: int) -> Optional[Friendship]:
        doc = await self._col.find_one_and_update(
            {
                "_id": pair_key(requester_id, target_id),
                "user_id": requester_id,
                "status": FriendshipStatus.PENDING.value,
            },
            {"$set": {"status": FriendshipStatus.CONFIRMED.value}},
            return_document=ReturnDocument.AFTER,
        )
        return None if doc is None else _from_doc(doc)

    async def delete(self, a: int, b: int) -> bool:
        res = await self._col.delete_one({"_id": pair_key(a, b)})
        return res.deleted_count == 1

    async def list_for_user(self, user_id: int) -> List[Friendship]:
        cur = self._col.find(
            {"$or": [{"user_id": user_id}, {"friend_id": user_id}]}
        ).sort("created_at", 1)
        return [_from_doc(d) async for d in cur]

    async def clear(self) -> None:
        await self._col.delete_many({})
