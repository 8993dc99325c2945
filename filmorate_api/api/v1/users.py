from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from filmorate_api.api.http_utils import handle_failures
from filmorate_api.core.result import Failure
from filmorate_api.dependencies import get_users_service
from filmorate_api.models.friendship import Friendship
from filmorate_api.models.responses import FriendshipRemoveResponse
from filmorate_api.models.users import User, UserIn
from filmorate_api.services.users_service import UsersService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[User], status_code=HTTPStatus.OK)
async def list_users(svc: UsersService = Depends(get_users_service)):
    return await svc.find_all()


@router.delete("/clear", status_code=HTTPStatus.NO_CONTENT)
async def clear_users(svc: UsersService = Depends(get_users_service)):
    await svc.clear()
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{user_id}", response_model=User, status_code=HTTPStatus.OK)
@handle_failures
async def get_user(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.get_by_id(user_id)


@router.post("", response_model=User, status_code=HTTPStatus.CREATED)
@handle_failures
async def create_user(
    body: UserIn,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.create(body)


@router.put("", response_model=User, status_code=HTTPStatus.OK)
@handle_failures
async def update_user(
    body: UserIn,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.update(body)


# ---------- friends ----------

@router.put("/{user_id}/friends/{friend_id}",
            response_model=Friendship,
            status_code=HTTPStatus.OK)
@handle_failures
async def add_friend(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.befriend(user_id, friend_id)


@router.put("/{user_id}/friends/{friend_id}/confirm",
            response_model=Friendship,
            status_code=HTTPStatus.OK)
@handle_failures
async def confirm_friend(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.confirm_friendship(user_id, friend_id)


@router.delete("/{user_id}/friends/{friend_id}",
               response_model=FriendshipRemoveResponse,
               status_code=HTTPStatus.OK)
@handle_failures
async def remove_friend(
    user_id: int,
    friend_id: int,
    svc: UsersService = Depends(get_users_service),
):
    deleted = await svc.remove_friendship(user_id, friend_id)
    if isinstance(deleted, Failure):
        return deleted
    return FriendshipRemoveResponse(ok=True, deleted=deleted)


@router.get("/{user_id}/friends",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_failures
async def list_friends(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    ids = await svc.get_friends(user_id)
    if isinstance(ids, Failure):
        return ids
    return await svc.resolve(ids)


@router.get("/{user_id}/friends/common/{other_id}",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_failures
async def list_common_friends(
    user_id: int,
    other_id: int,
    svc: UsersService = Depends(get_users_service),
):
    ids = await svc.get_common_friends(user_id, other_id)
    if isinstance(ids, Failure):
        return ids
    return await svc.resolve(ids)


@router.get("/{user_id}/friends/status",
            response_model=List[Friendship],
            status_code=HTTPStatus.OK)
@handle_failures
async def list_friendship_statuses(
    user_id: int,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.get_friendship_statuses(user_id)
