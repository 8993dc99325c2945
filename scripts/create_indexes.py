from pymongo import MongoClient, ASCENDING, DESCENDING
from filmorate_api.core.config import settings


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)

    # films: лайки — массив в документе, ищем «что лайкнул пользователь»
    db["films"].create_index([("likes", ASCENDING)], name="films_likes")

    # users: логин и почта уникальны только по смыслу, индекс для поиска
    db["users"].create_index([("login", ASCENDING)], name="users_login")
    db["users"].create_index([("email", ASCENDING)], name="users_email")

    # friendships: _id = "min:max" уже уникален; нужны выборки по стороне
    db["friendships"].create_index(
        [("user_id", ASCENDING), ("status", ASCENDING)],
        name="friendships_user_status"
    )
    db["friendships"].create_index(
        [("friend_id", ASCENDING), ("status", ASCENDING)],
        name="friendships_friend_status"
    )
    db["friendships"].create_index(
        [("created_at", DESCENDING)], name="friendships_created_desc"
    )

    print("Indexes ensured.")


if __name__ == "__main__":
    main()
