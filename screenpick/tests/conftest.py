from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from screenpick.analytics.store import clear_events
from screenpick.app import app
from screenpick.favorites.storage import MemoryStorage
from screenpick.favorites.store import FavoritesStore, get_favorites_store
from screenpick.recommendations.data_store import DatasetCache, get_dataset_cache

SCENARIO_CSV = (
    "Series_Title,Released_Year,Genre,IMDB_Rating\n"
    "A,1994,Drama,8.5\n"
    "B,1999,Comedy,7.0\n"
    "C,2015,Comedy,9.0\n"
)


def make_cache(text: str) -> DatasetCache:
    return DatasetCache(fetch=lambda config: text)


@pytest.fixture(autouse=True)
def _clean_events():
    clear_events()
    yield
    clear_events()


@pytest.fixture
def scenario_cache() -> DatasetCache:
    return make_cache(SCENARIO_CSV)


@pytest.fixture
def bundled_cache() -> DatasetCache:
    """Cache over the CSV shipped with the package."""
    return DatasetCache()


@pytest.fixture
def memory_store() -> FavoritesStore:
    return FavoritesStore(MemoryStorage())


@pytest.fixture
def client(bundled_cache, memory_store):
    app.dependency_overrides[get_dataset_cache] = lambda: bundled_cache
    app.dependency_overrides[get_favorites_store] = lambda: memory_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
