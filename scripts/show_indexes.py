from pymongo import MongoClient
from filmorate_api.core.config import settings


def dump(col_name: str):
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]
    idx = list(db[col_name].list_indexes())
    print(f"\nIndexes in '{col_name}':")
    for i in idx:
        print(" -", i)


if __name__ == "__main__":
    for name in ("films", "users", "friendships", "counters"):
        dump(name)
