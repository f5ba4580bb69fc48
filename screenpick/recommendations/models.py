from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_YEAR = 2000
DEFAULT_RUNTIME = "N/A"
DEFAULT_RATING = 0.0
DEFAULT_OVERVIEW = "No description available"
DEFAULT_POSTER = "https://via.placeholder.com/300x450?text=No+Poster"


class MovieRecord(BaseModel):
    """Canonical, fully defaulted representation of one dataset row."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(..., min_length=1)
    year: int = DEFAULT_YEAR
    runtime: str = DEFAULT_RUNTIME
    genres: list[str] = Field(default_factory=list)
    rating: float = DEFAULT_RATING
    overview: str = DEFAULT_OVERVIEW
    poster: str = DEFAULT_POSTER


class RecommendationRequest(BaseModel):
    genre: str | None = Field(default=None, description="Case-insensitive genre substring")
    year: int | str | None = Field(
        default=None, description="Any year inside the wanted decade, e.g. 1995 for the 90s"
    )
    language: str | None = Field(
        default=None,
        description="Only diversifies the shuffle seed; the dataset has no language column",
    )
    mood: str | None = Field(default=None, description="One of the keys of MOOD_GENRES")
    limit: int = 6
    offset: int = 0


class RecommendationResponse(BaseModel):
    success: bool = True
    movies: list[MovieRecord]
    message: str
    total_results: int


class TrendingResponse(BaseModel):
    success: bool = True
    movies: list[MovieRecord]
    message: str


class FailureResponse(BaseModel):
    success: bool = False
    movies: list[MovieRecord] = Field(default_factory=list)
    message: str
