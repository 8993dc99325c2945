from fastapi import Depends, Request

from filmorate_api.core.config import settings
from filmorate_api.db.mongo import close_client, get_mongo_db
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.ranking_service import RankingService
from filmorate_api.services.reference_service import ReferenceData
from filmorate_api.services.repositories.base import Storage
from filmorate_api.services.repositories.films_repo import FilmsRepo
from filmorate_api.services.repositories.friendships_repo import (
    FriendshipsRepo,
)
from filmorate_api.services.repositories.memory_repo import (
    build_memory_storage,
)
from filmorate_api.services.repositories.users_repo import UsersRepo
from filmorate_api.services.users_service import UsersService


async def build_storage(backend: str | None = None) -> Storage:
    """Собираем репозитории выбранного бэкенда (memory | mongo)."""
    backend = backend or settings.storage_backend
    if backend == "memory":
        return build_memory_storage()
    if backend == "mongo":
        db = await get_mongo_db()
        return Storage(
            films=FilmsRepo(db),
            users=UsersRepo(db),
            friendships=FriendshipsRepo(db),
            close=close_client,
        )
    raise ValueError(f"unknown storage backend: {backend}")


async def get_storage(request: Request) -> Storage:
    # единая точка доступа: хранилище живёт в app.state с lifespan
    return request.app.state.storage


async def get_reference(request: Request) -> ReferenceData:
    return request.app.state.reference


async def get_films_service(
        storage: Storage = Depends(get_storage),
        reference: ReferenceData = Depends(get_reference),
) -> FilmsService:
    return FilmsService(storage.films, storage.users, reference)


async def get_users_service(
        storage: Storage = Depends(get_storage),
) -> UsersService:
    return UsersService(storage.users, storage.friendships,
                        auto_confirm=settings.friendship_auto_confirm)


async def get_ranking_service(
        storage: Storage = Depends(get_storage),
) -> RankingService:
    return RankingService(storage.films,
                          default_count=settings.popular_default_count)
