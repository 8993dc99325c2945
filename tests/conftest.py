import os
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from filmorate_api.core.config import settings
from filmorate_api.main import app
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.ranking_service import RankingService
from filmorate_api.services.reference_service import ReferenceData
from filmorate_api.services.repositories.memory_repo import (
    build_memory_storage,
)
from filmorate_api.services.users_service import UsersService


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["STORAGE_BACKEND"] = "memory"
    os.environ["SENTRY_DSN"] = ""  # отключаем Sentry
    settings.storage_backend = "memory"
    settings.sentry_dsn = ""
    settings.friendship_auto_confirm = False


@pytest.fixture
async def client():
    # свежий lifespan на тест — значит и чистое in-memory хранилище
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac


@pytest.fixture
def storage():
    return build_memory_storage()


@pytest.fixture
def reference():
    return ReferenceData()


@pytest.fixture
def films_service(storage, reference):
    return FilmsService(storage.films, storage.users, reference)


@pytest.fixture
def users_service(storage):
    return UsersService(storage.users, storage.friendships)


@pytest.fixture
def ranking_service(storage):
    return RankingService(storage.films)
