"""Mongo repository for films collection."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from filmorate_api.core.result import StorageError
from filmorate_api.models.films import Film
from filmorate_api.services.repositories.counters import IdCounter


def _to_doc(film: Film) -> Dict[str, Any]:
    # mode="json": даты уходят строками ISO, BSON не умеет голый date
    doc = film.model_dump(mode="json", exclude={"id", "likes"})
    doc["_id"] = film.id
    return doc


def _from_doc(doc: Dict[str, Any]) -> Film:
    data = dict(doc)
    data["id"] = data.pop("_id")
    data["likes"] = sorted(data.get("likes") or [])
    return Film.model_validate(data)


class FilmsRepo:
    """CRUD + like-set for films; like mutations are single-doc atomic."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db["films"]
        self._ids = IdCounter(db, "films")

    async def find_all(self) -> List[Film]:
        cur = self._col.find({}).sort("_id", ASCENDING)
        return [_from_doc(d) async for d in cur]

    async def create(self, film: Film) -> Film:
        try:
            film_id = await self._ids.next_id()
            doc = _to_doc(film.model_copy(update={"id": film_id}))
            doc["likes"] = sorted(set(film.likes))
            await self._col.insert_one(doc)
        except PyMongoError as error:
            raise StorageError(f"mongo_film_create_error: {error}") from error
        return _from_doc(doc)

    async def update(self, film: Film) -> Optional[Film]:
        doc = _to_doc(film)
        doc.pop("_id")
        res = await self._col.update_one({"_id": film.id}, {"$set": doc})
        if res.matched_count == 0:
            return None
        return await self.find_by_id(film.id)

    async def find_by_id(self, film_id: int) -> Optional[Film]:
        doc = await self._col.find_one({"_id": film_id})
        return None if doc is None else _from_doc(doc)

    async def exists_by_id(self, film_id: int) -> bool:
        return await self._col.count_documents({"_id": film_id},
                                               limit=1) > 0

    async def clear(self) -> None:
        await self._col.delete_many({})
        await self._ids.reset()

    async def add_like(self, film_id: int, user_id: int) -> bool:
        res = await self._col.update_one(
            {"_id": film_id},
            {"$addToSet": {"likes": user_id}},
        )
        return res.modified_count == 1

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        res = await self._col.update_one(
            {"_id": film_id},
            {"$pull": {"likes": user_id}},
        )
        return res.modified_count == 1

    async def get_likes(self, film_id: int) -> Set[int]:
        doc = await self._col.find_one({"_id": film_id},
                                       {"_id": 0, "likes": 1})
        return set(doc.get("likes") or []) if doc else set()
