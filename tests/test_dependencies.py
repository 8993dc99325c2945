import pytest
from filmorate_api.dependencies import build_storage
from filmorate_api.services.repositories.memory_repo import (
    InMemoryFilmRepo,
    InMemoryFriendshipRepo,
    InMemoryUserRepo,
)


async def test_build_storage_memory_backend():
    storage = await build_storage("memory")
    assert isinstance(storage.films, InMemoryFilmRepo)
    assert isinstance(storage.users, InMemoryUserRepo)
    assert isinstance(storage.friendships, InMemoryFriendshipRepo)
    storage.close()


async def test_build_storage_memory_backends_are_independent():
    s1 = await build_storage("memory")
    s2 = await build_storage("memory")
    assert s1.films is not s2.films


async def test_build_storage_unknown_backend_raises():
    with pytest.raises(ValueError):
        await build_storage("redis")


async def test_app_state_holds_storage_between_requests(client):
    r = await client.post("/users", json={
        "email": "a@b.c", "login": "abc", "birthday": "2000-01-01"})
    user_id = r.json()["id"]
    r = await client.get(f"/users/{user_id}")
    assert r.status_code == 200
