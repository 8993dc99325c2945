"""Tests for the friendship state machine and its API."""

from __future__ import annotations

import pytest

from filmorate_api.core.config import settings
from filmorate_api.core.result import Failure, FailureKind
from filmorate_api.models.friendship import FriendshipStatus
from filmorate_api.services.users_service import UsersService
from tests.helpers import make_user, post_user


@pytest.fixture
async def trio(users_service):
    return [await make_user(users_service, login)
            for login in ("ann", "bob", "cid")]


async def test_request_creates_pending_record(users_service, trio):
    a, b, _ = trio

    record = await users_service.request_friendship(a.id, b.id)

    assert record.status is FriendshipStatus.PENDING
    assert (record.user_id, record.friend_id) == (a.id, b.id)
    assert await users_service.get_friends(a.id) == set()


async def test_confirm_makes_friendship_symmetric(users_service, trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)

    record = await users_service.confirm_friendship(b.id, a.id)

    assert record.status is FriendshipStatus.CONFIRMED
    assert b.id in await users_service.get_friends(a.id)
    assert a.id in await users_service.get_friends(b.id)


async def test_only_target_may_confirm(users_service, trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)

    result = await users_service.confirm_friendship(a.id, b.id)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.STATE_CONFLICT


async def test_confirm_without_request_is_conflict(users_service, trio):
    a, b, _ = trio
    result = await users_service.confirm_friendship(b.id, a.id)
    assert result.kind is FailureKind.STATE_CONFLICT


async def test_confirm_twice_is_conflict(users_service, trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)
    await users_service.confirm_friendship(b.id, a.id)

    result = await users_service.confirm_friendship(b.id, a.id)
    assert result.kind is FailureKind.STATE_CONFLICT


async def test_repeated_request_returns_existing_record(users_service, trio):
    a, b, _ = trio
    first = await users_service.request_friendship(a.id, b.id)
    await users_service.confirm_friendship(b.id, a.id)

    again = await users_service.request_friendship(b.id, a.id)

    assert again.status is FriendshipStatus.CONFIRMED
    assert again.created_at == first.created_at


async def test_remove_works_from_either_side(users_service, trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)
    await users_service.confirm_friendship(b.id, a.id)

    assert await users_service.remove_friendship(b.id, a.id) is True
    assert await users_service.get_friends(a.id) == set()
    assert await users_service.get_friends(b.id) == set()
    # повторное удаление — не ошибка
    assert await users_service.remove_friendship(a.id, b.id) is False


async def test_removed_pending_request_can_be_sent_again(users_service,
                                                         trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)
    await users_service.remove_friendship(b.id, a.id)

    assert (await users_service.confirm_friendship(b.id, a.id)).kind \
        is FailureKind.STATE_CONFLICT
    record = await users_service.request_friendship(b.id, a.id)
    assert record.user_id == b.id


async def test_self_friendship_is_rejected(users_service, trio):
    a, _, _ = trio
    result = await users_service.request_friendship(a.id, a.id)
    assert result.kind is FailureKind.VALIDATION
    assert await users_service.get_friendship_statuses(a.id) == []


async def test_unknown_user_is_not_found(users_service, trio):
    a, _, _ = trio
    assert (await users_service.request_friendship(a.id, 404)).kind \
        is FailureKind.NOT_FOUND
    assert (await users_service.get_friends(404)).kind \
        is FailureKind.NOT_FOUND


async def test_common_friends_exclude_the_pair(users_service, trio):
    a, b, c = trio
    for x, y in ((a, b), (a, c), (b, c)):
        await users_service.request_friendship(x.id, y.id)
        await users_service.confirm_friendship(y.id, x.id)

    assert await users_service.get_common_friends(a.id, b.id) == {c.id}
    # a и b дружат между собой, но в общие друзья не попадают
    common = await users_service.get_common_friends(a.id, c.id)
    assert a.id not in common and c.id not in common


async def test_pending_requests_do_not_count_as_common(users_service, trio):
    a, b, c = trio
    await users_service.request_friendship(a.id, c.id)
    await users_service.request_friendship(b.id, c.id)
    await users_service.confirm_friendship(c.id, a.id)

    assert await users_service.get_common_friends(a.id, b.id) == set()


async def test_get_friends_returns_independent_copy(users_service, trio):
    a, b, _ = trio
    await users_service.add_friend(a.id, b.id)

    friends = await users_service.get_friends(a.id)
    friends.clear()

    assert await users_service.get_friends(a.id) == {b.id}


async def test_symmetric_mode_adds_both_sides_at_once(storage, trio):
    a, b, _ = trio
    svc = UsersService(storage.users, storage.friendships, auto_confirm=True)

    record = await svc.befriend(a.id, b.id)

    assert record.status is FriendshipStatus.CONFIRMED
    assert await svc.get_friends(a.id) == {b.id}
    assert await svc.get_friends(b.id) == {a.id}


async def test_symmetric_add_confirms_pending_request(users_service, trio):
    a, b, _ = trio
    await users_service.request_friendship(a.id, b.id)

    record = await users_service.add_friend(b.id, a.id)

    assert record.status is FriendshipStatus.CONFIRMED
    assert record.user_id == a.id


# ---------------------------------------------------------------------------


async def test_friendship_api_flow(client):
    a = await post_user(client, "ann")
    b = await post_user(client, "bob")
    c = await post_user(client, "cid")

    r = await client.put(f"/users/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200
    assert r.json()["status"] == "PENDING"
    assert r.json()["userId"] == a["id"]

    r = await client.get(f"/users/{a['id']}/friends")
    assert r.json() == []

    r = await client.put(f"/users/{b['id']}/friends/{a['id']}/confirm")
    assert r.status_code == 200 and r.json()["status"] == "CONFIRMED"

    r = await client.get(f"/users/{a['id']}/friends")
    assert [u["login"] for u in r.json()] == ["bob"]

    await client.put(f"/users/{c['id']}/friends/{a['id']}")
    await client.put(f"/users/{a['id']}/friends/{c['id']}/confirm")
    await client.put(f"/users/{c['id']}/friends/{b['id']}")
    await client.put(f"/users/{b['id']}/friends/{c['id']}/confirm")

    r = await client.get(f"/users/{a['id']}/friends/common/{b['id']}")
    assert [u["login"] for u in r.json()] == ["cid"]

    r = await client.get(f"/users/{a['id']}/friends/status")
    assert {s["status"] for s in r.json()} == {"CONFIRMED"}
    assert len(r.json()) == 2

    r = await client.delete(f"/users/{b['id']}/friends/{a['id']}")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "deleted": True}
    r = await client.get(f"/users/{a['id']}/friends")
    assert [u["login"] for u in r.json()] == ["cid"]


async def test_confirm_missing_request_returns_409(client):
    a = await post_user(client, "ann")
    b = await post_user(client, "bob")

    r = await client.put(f"/users/{a['id']}/friends/{b['id']}/confirm")
    assert r.status_code == 409


async def test_self_friendship_returns_400(client):
    a = await post_user(client, "ann")
    r = await client.put(f"/users/{a['id']}/friends/{a['id']}")
    assert r.status_code == 400


async def test_friends_of_unknown_user_returns_404(client):
    r = await client.get("/users/999/friends")
    assert r.status_code == 404


async def test_auto_confirm_setting_switches_put_to_symmetric(client,
                                                              monkeypatch):
    monkeypatch.setattr(settings, "friendship_auto_confirm", True)
    a = await post_user(client, "ann")
    b = await post_user(client, "bob")

    r = await client.put(f"/users/{a['id']}/friends/{b['id']}")
    assert r.json()["status"] == "CONFIRMED"

    r = await client.get(f"/users/{b['id']}/friends")
    assert [u["login"] for u in r.json()] == ["ann"]
