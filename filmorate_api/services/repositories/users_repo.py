from __future__ import annotations

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from filmorate_api.core.result import StorageError
from filmorate_api.models.users import User
from filmorate_api.services.repositories.counters import IdCounter


def _to_doc(user: User) -> Dict[str, Any]:
    doc = user.model_dump(mode="json", exclude={"id"})
    doc["_id"] = user.id
    return doc


def _from_doc(doc: Dict[str, Any]) -> User:
    data = dict(doc)
    data["id"] = data.pop("_id")
    return User.model_validate(data)


class UsersRepo:
    def __init__(self, db: AsyncIOMotorDatabase):
        self._col = db["users"]
        self._ids = IdCounter(db, "users")

    async def find_all(self) -> List[User]:
        cur = self._col.find({}).sort("_id", ASCENDING)
        return [_from_doc(d) async for d in cur]

    async def create(self, user: User) -> User:
        try:
            user_id = await self._ids.next_id()
            doc = _to_doc(user.model_copy(update={"id": user_id}))
            await self._col.insert_one(doc)
        except PyMongoError as error:
            raise StorageError(f"mongo_user_create_error: {error}") from error
        return _from_doc(doc)

    async def update(self, user: User) -> Optional[User]:
        doc = _to_doc(user)
        res = await self._col.replace_one({"_id": user.id}, doc)
        return None if res.matched_count == 0 else user

    async def find_by_id(self, user_id: int) -> Optional[User]:
        doc = await self._col.find_one({"_id": user_id})
        return None if doc is None else _from_doc(doc)

    async def find_by_ids(self, user_ids: List[int]) -> List[User]:
        cur = self._col.find({"_id": {"$in": list(user_ids)}})
        by_id = {d["_id"]: _from_doc(d) async for d in cur}
        return [by_id[i] for i in user_ids if i in by_id]

    async def exists_by_id(self, user_id: int) -> bool:
        return await self._col.count_documents({"_id": user_id},
                                               limit=1) > 0

    async def clear(self) -> None:
        await self._col.delete_many({})
        await self._ids.reset()
