from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends

from filmorate_api.api.http_utils import not_found_if_none
from filmorate_api.dependencies import get_reference
from filmorate_api.models.reference import Genre, Mpa
from filmorate_api.services.reference_service import ReferenceData

router = APIRouter(tags=["reference"])


@router.get("/genres", response_model=List[Genre], status_code=HTTPStatus.OK)
async def list_genres(ref: ReferenceData = Depends(get_reference)):
    return ref.list_genres()


@router.get("/genres/{genre_id}", response_model=Genre,
            status_code=HTTPStatus.OK)
async def get_genre(
    genre_id: int,
    ref: ReferenceData = Depends(get_reference),
):
    return not_found_if_none(ref.find_genre(genre_id),
                             detail=f"genre id={genre_id} not found")


@router.get("/mpa", response_model=List[Mpa], status_code=HTTPStatus.OK)
async def list_mpa(ref: ReferenceData = Depends(get_reference)):
    return ref.list_mpa()


@router.get("/mpa/{mpa_id}", response_model=Mpa, status_code=HTTPStatus.OK)
async def get_mpa(
    mpa_id: int,
    ref: ReferenceData = Depends(get_reference),
):
    return not_found_if_none(ref.find_mpa(mpa_id),
                             detail=f"mpa id={mpa_id} not found")
