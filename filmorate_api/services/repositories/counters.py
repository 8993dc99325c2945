from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument


class IdCounter:
    """Монотонные int-id на коллекцию через атомарный $inc."""

    def __init__(self, db: AsyncIOMotorDatabase, name: str) -> None:
        self._col = db["counters"]
        self._name = name

    async def next_id(self) -> int:
        doc = await self._col.find_one_and_update(
            {"_id": self._name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    async def reset(self) -> None:
        await self._col.delete_one({"_id": self._name})
