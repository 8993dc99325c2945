from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from filmorate_api.api.http_utils import handle_failures
from filmorate_api.dependencies import (
    get_films_service,
    get_ranking_service,
)
from filmorate_api.models.films import Film, FilmIn
from filmorate_api.models.responses import LikeCountResponse
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.ranking_service import RankingService

router = APIRouter(prefix="/films", tags=["films"])


@router.get("", response_model=List[Film], status_code=HTTPStatus.OK)
async def list_films(svc: FilmsService = Depends(get_films_service)):
    return await svc.find_all()


# /popular и /clear объявлены до /{film_id}
@router.get("/popular", response_model=List[Film],
            status_code=HTTPStatus.OK)
async def popular_films(
    count: Optional[int] = Query(None),
    svc: RankingService = Depends(get_ranking_service),
):
    return await svc.get_popular(count)


@router.delete("/clear", status_code=HTTPStatus.NO_CONTENT)
async def clear_films(svc: FilmsService = Depends(get_films_service)):
    await svc.clear()
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{film_id}", response_model=Film, status_code=HTTPStatus.OK)
@handle_failures
async def get_film(
    film_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.get_by_id(film_id)


@router.post("", response_model=Film, status_code=HTTPStatus.CREATED)
@handle_failures
async def create_film(
    body: FilmIn,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.create(body)


@router.put("", response_model=Film, status_code=HTTPStatus.OK)
@handle_failures
async def update_film(
    body: FilmIn,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.update(body)


@router.put("/{film_id}/like/{user_id}",
            response_model=LikeCountResponse,
            status_code=HTTPStatus.OK)
@handle_failures
async def add_like(
    film_id: int,
    user_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    count = await svc.add_like(film_id, user_id)
    if isinstance(count, int):
        return LikeCountResponse(film_id=film_id, likes=count)
    return count


@router.delete("/{film_id}/like/{user_id}",
               response_model=LikeCountResponse,
               status_code=HTTPStatus.OK)
@handle_failures
async def remove_like(
    film_id: int,
    user_id: int,
    svc: FilmsService = Depends(get_films_service),
):
    count = await svc.remove_like(film_id, user_id)
    if isinstance(count, int):
        return LikeCountResponse(film_id=film_id, likes=count)
    return count
