from pydantic import BaseModel, ConfigDict, Field


class LikeCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    film_id: int = Field(alias="filmId")
    likes: int


class FriendshipRemoveResponse(BaseModel):
    ok: bool
    deleted: bool
