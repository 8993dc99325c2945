from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FriendshipStatus(str, Enum):
    PENDING = "PENDING"      # заявка отправлена
    CONFIRMED = "CONFIRMED"  # подтверждена второй стороной


class Friendship(BaseModel):
    """Заявка user_id -> friend_id; после подтверждения дружба взаимная."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    friend_id: int = Field(alias="friendId")
    status: FriendshipStatus
    created_at: datetime = Field(alias="createdAt")

    def involves(self, user_id: int) -> bool:
        return user_id in (self.user_id, self.friend_id)

    def counterpart(self, user_id: int) -> int:
        return self.friend_id if self.user_id == user_id else self.user_id
