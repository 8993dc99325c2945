from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from filmorate_api.models.reference import Genre, Mpa


class RefId(BaseModel):
    """Ссылка на справочник во входящем payload: {"id": 1}."""
    id: int


class FilmIn(BaseModel):
    """Сырой payload фильма. Правила проверяет validation, не pydantic."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    release_date: Optional[date] = Field(default=None, alias="releaseDate")
    duration: Optional[int] = None
    mpa: Optional[RefId] = None
    genres: List[RefId] = Field(default_factory=list)


class Film(BaseModel):
    """Фильм в хранилище и в ответах API."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: Optional[str] = None
    release_date: date = Field(alias="releaseDate")
    duration: int
    mpa: Optional[Mpa] = None
    genres: List[Genre] = Field(default_factory=list)
    likes: List[int] = Field(default_factory=list)

    @property
    def likes_count(self) -> int:
        return len(self.likes)
