from typing import Any, Dict

from httpx import AsyncClient

from filmorate_api.core.result import Failure
from filmorate_api.models.films import Film, FilmIn
from filmorate_api.models.users import User, UserIn


def film_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Test Film",
        "description": "Test Description",
        "releaseDate": "2000-01-01",
        "duration": 120,
    }
    payload.update(overrides)
    return payload


def user_payload(login: str = "bob", **overrides: Any) -> Dict[str, Any]:
    payload = {
        "email": f"{login}@example.com",
        "login": login,
        "name": f"User {login}",
        "birthday": "1990-01-01",
    }
    payload.update(overrides)
    return payload


def film_in(**overrides: Any) -> FilmIn:
    return FilmIn.model_validate(film_payload(**overrides))


def user_in(login: str = "bob", **overrides: Any) -> UserIn:
    return UserIn.model_validate(user_payload(login, **overrides))


async def make_film(svc, **overrides: Any) -> Film:
    film = await svc.create(film_in(**overrides))
    assert not isinstance(film, Failure), film
    return film


async def make_user(svc, login: str = "bob", **overrides: Any) -> User:
    user = await svc.create(user_in(login, **overrides))
    assert not isinstance(user, Failure), user
    return user


async def post_film(client: AsyncClient, **overrides: Any) -> dict:
    r = await client.post("/films", json=film_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


async def post_user(client: AsyncClient, login: str = "bob",
                    **overrides: Any) -> dict:
    r = await client.post("/users", json=user_payload(login, **overrides))
    assert r.status_code == 201, r.text
    return r.json()

