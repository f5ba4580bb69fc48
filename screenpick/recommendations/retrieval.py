from __future__ import annotations

import random
import re
import time

from ..analytics.store import record_event
from .data_store import DatasetCache, get_dataset_cache
from .models import (
    MovieRecord,
    RecommendationRequest,
    RecommendationResponse,
    TrendingResponse,
)
from .shuffle import AmbientSource, RandomSource, SeededSource, shuffle

RECOMMENDATION_MESSAGES = [
    "Our AI picked these just for you",
    "Based on your mood",
    "Specially curated recommendations",
    "Handpicked by our algorithm",
    "Perfect matches for you",
    "Discovered these gems",
    "You might enjoy these",
]

TRENDING_MESSAGE = "Trending movies everyone's watching"
TRENDING_MIN_YEAR = 2010
TRENDING_LIMIT = 12

MOOD_GENRES: dict[str, list[str]] = {
    "happy": ["Comedy", "Animation", "Musical", "Family"],
    "sad": ["Drama", "Romance", "Biography"],
    "excited": ["Action", "Adventure", "Thriller", "Sci-Fi"],
    "relaxed": ["Comedy", "Romance", "Family", "Animation"],
    "scared": ["Horror", "Thriller", "Mystery"],
    "thoughtful": ["Drama", "Documentary", "Biography", "History"],
    "romantic": ["Romance", "Drama"],
    "adventurous": ["Adventure", "Action", "Fantasy"],
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def decade_bounds(year: int | str | None) -> tuple[int, int] | None:
    """Return the inclusive decade containing ``year``, or None if unreadable."""
    if year is None or isinstance(year, bool):
        return None
    if isinstance(year, int):
        value = year
    else:
        match = _LEADING_INT.match(str(year))
        if not match:
            return None
        value = int(match.group(1))
    # Year 0 means the value was missing.
    if value == 0:
        return None
    start = (value // 10) * 10
    return start, start + 9


def shuffle_source(language: str | None, offset: int) -> RandomSource:
    """Seeded by the language's first character plus offset, else ambient."""
    if language:
        return SeededSource(ord(language[0]) + offset)
    return AmbientSource()


def _matches_genre(movie: MovieRecord, genre_lower: str) -> bool:
    return any(genre_lower in g.lower() for g in movie.genres)


def _matches_mood(movie: MovieRecord, mood_genres_lower: set[str]) -> bool:
    return any(g.lower() in mood_genres_lower for g in movie.genres)


def _by_rating(movies: list[MovieRecord]) -> list[MovieRecord]:
    # sorted() is stable with reverse=True, so ties keep their input order
    return sorted(movies, key=lambda m: m.rating, reverse=True)


def filter_movies(movies: list[MovieRecord], request: RecommendationRequest) -> list[MovieRecord]:
    """Apply the genre, mood, and decade filters; absent filters are no-ops."""
    candidates = movies

    genre_lower = (request.genre or "").strip().lower()
    if genre_lower:
        candidates = [m for m in candidates if _matches_genre(m, genre_lower)]

    if request.mood:
        mood_genres = MOOD_GENRES.get(request.mood.strip().lower())
        if mood_genres:
            mood_genres_lower = {g.lower() for g in mood_genres}
            candidates = [m for m in candidates if _matches_mood(m, mood_genres_lower)]

    bounds = decade_bounds(request.year)
    if bounds:
        start, end = bounds
        candidates = [m for m in candidates if start <= m.year <= end]

    return candidates


def paginate(movies: list[MovieRecord], offset: int, limit: int) -> list[MovieRecord]:
    start = min(max(offset, 0), len(movies))
    end = min(start + max(limit, 0), len(movies))
    return movies[start:end]


async def get_recommendations(
    request: RecommendationRequest,
    cache: DatasetCache | None = None,
) -> RecommendationResponse:
    start_time = time.time()
    cache = cache or get_dataset_cache()
    movies = await cache.load()

    # --- Filters ---
    candidates = filter_movies(movies, request)
    total_results = len(candidates)

    # --- Shuffle, then stable sort so rating ties keep the shuffled order ---
    source = shuffle_source(request.language, request.offset)
    ranked = _by_rating(shuffle(candidates, source))

    page = paginate(ranked, request.offset, request.limit)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "genre": request.genre,
        "year": request.year,
        "language": request.language,
        "mood": request.mood,
        "offset": request.offset,
        "total_results": total_results,
        "results_returned": len(page),
        "response_time_ms": elapsed_ms,
    })

    return RecommendationResponse(
        movies=page,
        message=random.choice(RECOMMENDATION_MESSAGES),
        total_results=total_results,
    )


async def get_trending(cache: DatasetCache | None = None) -> TrendingResponse:
    start_time = time.time()
    cache = cache or get_dataset_cache()
    movies = await cache.load()

    recent = [m for m in movies if m.year >= TRENDING_MIN_YEAR]
    top = _by_rating(recent)[:TRENDING_LIMIT]

    record_event("trending", {
        "results_returned": len(top),
        "response_time_ms": round((time.time() - start_time) * 1000, 1),
    })

    return TrendingResponse(movies=top, message=TRENDING_MESSAGE)
