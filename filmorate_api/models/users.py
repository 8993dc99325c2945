from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel


class UserIn(BaseModel):
    """Сырой payload пользователя."""
    id: Optional[int] = None
    email: Optional[str] = None
    login: Optional[str] = None
    name: Optional[str] = None
    birthday: Optional[date] = None


class User(BaseModel):
    id: int
    email: str
    login: str
    name: str
    birthday: date
