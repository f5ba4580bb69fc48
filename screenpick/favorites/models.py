from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class FavoriteEntry(BaseModel):
    movie_title: str
    date_added: date
    rating: float
    year: int


class FavoriteRequest(BaseModel):
    title: str = Field(..., min_length=1)
    rating: float = 0.0
    year: int = 2000


class FavoriteResult(BaseModel):
    success: bool
    message: str
    mirror_submitted: bool = False


class FavoriteStatus(BaseModel):
    title: str
    is_favorited: bool


class FavoritesResponse(BaseModel):
    favorites: list[FavoriteEntry]
    total: int
