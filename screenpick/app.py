from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .data_ingestion.ingest import LoadError
from .favorites.models import (
    FavoriteRequest,
    FavoriteResult,
    FavoritesResponse,
    FavoriteStatus,
)
from .favorites.store import FavoritesStore, get_favorites_store
from .recommendations.data_store import DatasetCache, get_dataset_cache
from .recommendations.models import (
    FailureResponse,
    RecommendationRequest,
    RecommendationResponse,
    TrendingResponse,
)
from .recommendations.retrieval import MOOD_GENRES, get_recommendations, get_trending
from .sync.mirror import MirrorStatus

logger = logging.getLogger(__name__)

app = FastAPI(title="Movie Recommendation API", version="2.0.0")


@app.exception_handler(LoadError)
async def load_error_handler(request: Request, exc: LoadError) -> JSONResponse:
    logger.error("Dataset unavailable for %s: %s", request.url.path, exc)
    body = FailureResponse(message="Movie data is unavailable right now. Please try again.")
    return JSONResponse(status_code=503, content=body.model_dump())


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health(cache: DatasetCache = Depends(get_dataset_cache)) -> dict:
    return {"status": "ok", "dataset_loaded": cache.is_loaded}


@app.get("/metadata")
async def metadata(cache: DatasetCache = Depends(get_dataset_cache)) -> dict:
    movies = await cache.load()
    genres = sorted({g for m in movies for g in m.genres})
    decades = sorted({(m.year // 10) * 10 for m in movies})
    return {
        "genres": genres,
        "decades": decades,
        "moods": sorted(MOOD_GENRES),
        "total_movies": len(movies),
    }


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
async def recommendations(
    body: RecommendationRequest,
    cache: DatasetCache = Depends(get_dataset_cache),
) -> RecommendationResponse:
    return await get_recommendations(body, cache)


@app.get("/trending", response_model=TrendingResponse)
async def trending(cache: DatasetCache = Depends(get_dataset_cache)) -> TrendingResponse:
    return await get_trending(cache)


# ── Favorites endpoints ──────────────────────────────────────────────────


@app.get("/favorites", response_model=FavoritesResponse)
def list_favorites(store: FavoritesStore = Depends(get_favorites_store)) -> FavoritesResponse:
    favorites = store.get_favorites()
    return FavoritesResponse(favorites=favorites, total=len(favorites))


@app.post("/favorites", response_model=FavoriteResult)
async def add_favorite(
    body: FavoriteRequest,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteResult:
    return await store.save(body)


@app.get("/favorites/{title:path}", response_model=FavoriteStatus)
def favorite_status(title: str, store: FavoritesStore = Depends(get_favorites_store)) -> FavoriteStatus:
    return FavoriteStatus(title=title, is_favorited=store.is_favorited(title))


@app.delete("/favorites/{title:path}", response_model=FavoriteResult)
async def remove_favorite(
    title: str,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteResult:
    return await store.remove(title)


# ── Observability ────────────────────────────────────────────────────────


@app.get("/sync/status", response_model=MirrorStatus)
def sync_status(store: FavoritesStore = Depends(get_favorites_store)) -> MirrorStatus:
    return store.mirror.status()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
